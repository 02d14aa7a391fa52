"""Password-based encryption for config files.

Encrypted files are laid out as:

    magic (4 bytes) | salt (16 bytes) | Fernet token

The Fernet key is derived from the password with PBKDF2-HMAC-SHA256 and a
fresh random salt per write. Fernet authenticates the ciphertext, so a
wrong password and a modified file are indistinguishable and both raise
DecryptionError.
"""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from keepconf.utils.errors import CipherEnvironmentError, DecryptionError

MAGIC = b"KCF1"
SALT_SIZE = 16
KEY_SIZE = 32


def _check_token(token: bytes) -> None:
    """Reject tokens that are not exactly one canonical urlsafe-base64 string.

    Fernet decodes leniently and would ignore bytes appended after the
    padding, so a file with trailing garbage could still decrypt.
    """
    try:
        decoded = base64.b64decode(token, altchars=b"-_", validate=True)
    except binascii.Error as e:
        raise DecryptionError("Encrypted config is corrupted") from e
    if base64.urlsafe_b64encode(decoded) != token:
        raise DecryptionError("Encrypted config is corrupted")


class PasswordCipher:
    """Encrypt and decrypt byte strings with a password.

    Attributes:
        KDF_ITERATIONS: PBKDF2 work factor. Changing it makes previously
            written files undecryptable.
    """

    KDF_ITERATIONS = 480_000

    def __init__(self, password: str) -> None:
        self._password = password.encode("utf-8")

    def _fernet(self, salt: bytes) -> Fernet:
        try:
            kdf = PBKDF2HMAC(
                algorithm=hashes.SHA256(),
                length=KEY_SIZE,
                salt=salt,
                iterations=self.KDF_ITERATIONS,
            )
            key = base64.urlsafe_b64encode(kdf.derive(self._password))
            return Fernet(key)
        except UnsupportedAlgorithm as e:
            raise CipherEnvironmentError(f"Cryptographic backend is unusable: {e}") from e

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt ``plaintext`` with a freshly salted key."""
        salt = os.urandom(SALT_SIZE)
        return MAGIC + salt + self._fernet(salt).encrypt(plaintext)

    def decrypt(self, blob: bytes) -> bytes:
        """Decrypt a blob produced by :meth:`encrypt`.

        Raises:
            DecryptionError: If the blob is truncated, not an encrypted
                config, was modified, or the password is wrong.
            CipherEnvironmentError: If the cryptographic backend fails.
        """
        header_size = len(MAGIC) + SALT_SIZE
        if len(blob) <= header_size or not blob.startswith(MAGIC):
            raise DecryptionError("Data is not an encrypted config file")

        salt = blob[len(MAGIC) : header_size]
        token = blob[header_size:]
        _check_token(token)
        try:
            return self._fernet(salt).decrypt(token)
        except InvalidToken as e:
            raise DecryptionError("Wrong password or modified ciphertext") from e
