"""Personal-message (EIP-191) signature verification service.

This module recovers the signer address from a ``(message, signature)`` pair
produced by a wallet's ``personal_sign`` / ``signMessage`` operation:
- The message is hashed with the EIP-191 prefix
  ("\\x19Ethereum Signed Message:\\n" + length + message) and keccak256
- The signer's public key is recovered from the 65-byte (r, s, v) signature
- The address derived from the recovered key is returned in EIP-55 checksum form

Verification is a recoverability check only. A well-formed signature over a
*different* message still recovers *an* address (just not the one the caller
expected), so callers that need authorization must compare ``signer`` against
the identity they expect.
"""

import re
from enum import Enum
from typing import Any

import structlog
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys.constants import SECPK1_N
from eth_utils import decode_hex
from eth_utils.address import to_checksum_address
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = structlog.get_logger()

# Upper bound on message length accepted by is_valid_message(), in UTF-16 code units
MAX_MESSAGE_LENGTH = 10_000

# 0x + 65 bytes (r: 32, s: 32, v: 1) hex encoded
SIGNATURE_PATTERN = re.compile(r"0x[0-9a-fA-F]{130}")

SIGNATURE_LENGTH = 65

# Canonical (low-s) signatures keep s in the lower half of the curve order
MAX_CANONICAL_S = SECPK1_N // 2


class MessageType(str, Enum):
    """Signature scheme tag sent by clients.

    Only personal-message signing is implemented; the other members are
    reserved so clients can already send them without being rejected.
    """

    SIMPLE = "simple"
    EIP712_TYPED_DATA = "eip712"
    PERSONAL_SIGN = "personal_sign"


class VerificationResult(BaseModel):
    """Outcome of a signature verification (serialized with camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    is_valid: bool = Field(
        ...,
        description="True if a signer address could be recovered from the signature",
    )
    signer: str = Field(
        ...,
        description="Recovered EIP-55 checksum address, empty string if recovery failed",
    )
    original_message: str = Field(
        ...,
        description="The message exactly as submitted",
    )


def verify_signature(
    message: str, signature: str, message_type: MessageType | Any = None
) -> VerificationResult:
    """Recover the signer of an EIP-191 personal message signature.

    Args:
        message: The plain text message that was signed. Any string is accepted,
                including the empty string.
        signature: Hex encoded 65-byte signature (0x prefix optional). Only
                  canonical (low-s) signatures are accepted.
        message_type: Scheme tag from the request. Accepted for forward
                     compatibility; every tag is verified as a personal message.

    Returns:
        VerificationResult with is_valid=True and the checksum signer address if
        recovery succeeded, otherwise is_valid=False and an empty signer.
        Non-hex characters (including whitespace), a wrong length or a high-s
        value all count as failed recovery.

    Raises:
        No exceptions raised - malformed input is reported as is_valid=False

    Example:
        >>> from eth_account import Account
        >>> from eth_account.messages import encode_defunct
        >>> account = Account.create()
        >>> signed = account.sign_message(encode_defunct(text="Hello, Web3!"))
        >>> result = verify_signature("Hello, Web3!", signed.signature.hex())
        >>> result.is_valid, result.signer == account.address
        (True, True)
    """
    signature_prefix = signature[:10] if len(signature) > 10 else signature

    logger.debug(
        "signature_verification_attempt",
        message_preview=message[:50] if len(message) > 50 else message,
        signature_prefix=signature_prefix,
        message_type=message_type,
    )

    try:
        signature_bytes = decode_hex(signature)
        if len(signature_bytes) != SIGNATURE_LENGTH:
            raise ValueError(f"signature must be {SIGNATURE_LENGTH} bytes")
        if int.from_bytes(signature_bytes[32:64], "big") > MAX_CANONICAL_S:
            raise ValueError("non-canonical signature: s is above half the curve order")

        # Prepends "\x19Ethereum Signed Message:\n{len(message)}" before hashing
        signable = encode_defunct(text=message)
        signer = to_checksum_address(Account.recover_message(signable, signature=signature_bytes))

    except Exception as e:
        # eth_account/eth_keys raise several exception types for bad input;
        # any of them means the signature is not recoverable
        logger.warning(
            "signature_verification_failed",
            signature_prefix=signature_prefix,
            error=str(e),
            error_type=type(e).__name__,
        )
        return VerificationResult(is_valid=False, signer="", original_message=message)

    logger.info("signature_verification_success", signer=signer)
    return VerificationResult(is_valid=True, signer=signer, original_message=message)


def is_valid_signature_format(signature: str) -> bool:
    """Check that signature is 0x followed by exactly 130 hex characters.

    Purely syntactic: a well-formed signature may still fail recovery.
    """
    return SIGNATURE_PATTERN.fullmatch(signature) is not None


def is_valid_message(message: str) -> bool:
    """Check that message is not blank and at most MAX_MESSAGE_LENGTH UTF-16 code units.

    Characters outside the Basic Multilingual Plane (most emoji) count as two.
    """
    if not message.strip():
        return False
    utf16_length = len(message.encode("utf-16-le", errors="surrogatepass")) // 2
    return utf16_length <= MAX_MESSAGE_LENGTH
