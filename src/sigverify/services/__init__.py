"""Domain services: signature recovery and the service error hierarchy."""
