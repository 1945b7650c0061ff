"""Credential checks and fingerprinting.

Format checks are local and cheap: they catch pasted-wrong-field mistakes
before anything leaves the process. They do not prove a key is usable; the
only proof the validator gathers is one real call to the model provider.
"""

from __future__ import annotations

import hashlib
import json
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from ..config import settings
from ..logging_config import get_logger
from ..types.requests import REQUIRED_KEY_FIELDS, ApiKeys, CredentialSet
from .errors import AgentKitChatError, CredentialFormatError, InputError, KeyValidationError

logger = get_logger(__name__)

MIN_KEY_ID_LENGTH = 3
MIN_BASE64_LENGTH = 21
MIN_HEX_LENGTH = 64
FINGERPRINT_LENGTH = 16

INVALID_MODEL_KEY = "Invalid OpenAI API key"
KEYS_VALIDATED = "API keys validated successfully"

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]+={0,2}$")
_HEX_RE = re.compile(r"^0x[0-9a-fA-F]+$")
_WHITESPACE_RE = re.compile(r"\s+")

ModelKeyProbe = Callable[[str], Awaitable[None]]


def is_pem(value: str) -> bool:
    return "-----BEGIN" in value and "-----END" in value


def is_base64(value: str) -> bool:
    compact = _WHITESPACE_RE.sub("", value)
    return len(compact) >= MIN_BASE64_LENGTH and bool(_BASE64_RE.match(compact))


def is_prefixed_hex(value: str) -> bool:
    return len(value) >= MIN_HEX_LENGTH and bool(_HEX_RE.match(value))


def private_key_encoding(value: str) -> Optional[str]:
    """Name the recognised encoding of a wallet private key, or None."""
    value = value.strip()
    if is_pem(value):
        return "pem"
    if is_prefixed_hex(value):
        return "hex"
    if is_base64(value):
        return "base64"
    return None


def check_credential_format(keys: Union[ApiKeys, CredentialSet]) -> None:
    """Raise InputError/CredentialFormatError for anything a network call can't fix."""
    if not all((getattr(keys, name) or "").strip() for name in REQUIRED_KEY_FIELDS):
        raise InputError("OpenAI API key, wallet API key id, and wallet private key are required")

    if len(keys.wallet_key_id.strip()) < MIN_KEY_ID_LENGTH:
        raise CredentialFormatError(
            f"Invalid wallet API key id. It must be at least {MIN_KEY_ID_LENGTH} characters long."
        )

    if private_key_encoding(keys.wallet_private_key) is None:
        raise CredentialFormatError(
            "Invalid wallet private key format. Expected a PEM block, "
            "a Base64 string or a 0x-prefixed hex string."
        )


def fingerprint(credentials: CredentialSet) -> str:
    """Short, non-reversible cache key for a credential set."""
    canonical = json.dumps(
        [
            credentials.openai_key,
            credentials.wallet_key_id,
            credentials.wallet_private_key,
            credentials.network_id.value,
        ],
        separators=(",", ":"),
    )
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


@dataclass
class ValidationResult:
    valid: bool
    reason: Optional[str] = None


async def probe_openai_key(api_key: str) -> None:
    """Send a trivial prompt with the supplied key; raises on any failure."""
    from ..providers.llm import create_provider

    await create_provider("openai", api_key=api_key, model=settings.openai_model).verify_key()


class CredentialValidator:
    """Accept/reject a credential set before the client enters the chat view."""

    def __init__(self, probe: Optional[ModelKeyProbe] = None, default_network: Optional[str] = None):
        self._probe = probe or probe_openai_key
        self._default_network = default_network or settings.default_network_id

    async def validate(self, api_keys: ApiKeys) -> ValidationResult:
        try:
            check_credential_format(api_keys)
            credentials = api_keys.to_credentials(self._default_network)
        except AgentKitChatError as exc:
            logger.info("credentials_rejected", kind=exc.kind)
            return ValidationResult(valid=False, reason=exc.message)

        # One attempt only; a transient failure is reported and the user retries.
        try:
            await self._probe(credentials.openai_key)
        except Exception as exc:
            logger.info(
                "credentials_rejected",
                kind=KeyValidationError.kind,
                fingerprint=fingerprint(credentials),
                error_type=type(exc).__name__,
            )
            return ValidationResult(valid=False, reason=INVALID_MODEL_KEY)

        logger.info("credentials_accepted", fingerprint=fingerprint(credentials))
        return ValidationResult(valid=True)
