"""Tests for the storage transforms and key padding."""

import os
import unittest
import zlib

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from bland.errors import DecryptionError, EncodingError, InvalidKeyLength, StoreIOError
from bland.transforms import (
    NONCE_SIZE,
    TAG_SIZE,
    CompressedTransform,
    EncryptedTransform,
    PlainTransform,
    pad_key,
    resolve_transform,
)

DOCUMENT = '{"a":{"b":42},"name":"café"}'


class TestPadKey(unittest.TestCase):

    def test_short_key_zero_padded(self):
        key = pad_key("test_key")
        self.assertEqual(len(key), 32)
        self.assertEqual(key, b"test_key" + bytes(24))

    def test_exact_length_key(self):
        self.assertEqual(pad_key("k" * 32), b"k" * 32)

    def test_empty_key(self):
        self.assertEqual(pad_key(""), bytes(32))

    def test_too_long_key(self):
        with self.assertRaises(InvalidKeyLength):
            pad_key("test_key_this_key_will_be_too_long")

    def test_length_counted_in_bytes(self):
        # 16 characters, 32 bytes in UTF-8
        self.assertEqual(len(pad_key("é" * 16)), 32)
        with self.assertRaises(InvalidKeyLength):
            pad_key("é" * 17)

    def test_bytes_key(self):
        self.assertEqual(pad_key(b"\x01\x02"), b"\x01\x02" + bytes(30))


class TestResolveTransform(unittest.TestCase):

    def test_plain(self):
        self.assertIsInstance(resolve_transform(), PlainTransform)

    def test_compressed(self):
        self.assertIsInstance(resolve_transform(compress=True), CompressedTransform)

    def test_encryption_takes_precedence(self):
        transform = resolve_transform(pad_key("secret"), compress=True)
        self.assertIsInstance(transform, EncryptedTransform)


class TestSymmetry(unittest.TestCase):

    def test_round_trip_each_transform(self):
        for transform in (
            PlainTransform(),
            CompressedTransform(),
            EncryptedTransform(pad_key("secret")),
        ):
            with self.subTest(transform=transform.name):
                self.assertEqual(transform.unwrap(transform.wrap(DOCUMENT)), DOCUMENT)

    def test_plain_is_utf8(self):
        self.assertEqual(PlainTransform().wrap(DOCUMENT), DOCUMENT.encode("utf-8"))

    def test_compressed_is_zlib_stream(self):
        data = CompressedTransform().wrap(DOCUMENT)
        self.assertEqual(zlib.decompress(data), DOCUMENT.encode("utf-8"))

    def test_plain_invalid_utf8(self):
        with self.assertRaises(EncodingError):
            PlainTransform().unwrap(b"\xff\xfe")

    def test_compressed_invalid_stream(self):
        with self.assertRaises(StoreIOError):
            CompressedTransform().unwrap(b"not compressed")

    def test_compressed_invalid_utf8(self):
        with self.assertRaises(EncodingError):
            CompressedTransform().unwrap(zlib.compress(b"\xff"))


class TestEncryptedTransform(unittest.TestCase):

    def setUp(self):
        self.transform = EncryptedTransform(pad_key("secret"))

    def test_layout(self):
        data = self.transform.wrap(DOCUMENT)
        self.assertEqual(
            len(data), NONCE_SIZE + len(DOCUMENT.encode("utf-8")) + TAG_SIZE
        )
        self.assertNotIn(b"name", data)

    def test_fresh_nonce_per_write(self):
        first = self.transform.wrap(DOCUMENT)
        second = self.transform.wrap(DOCUMENT)
        self.assertNotEqual(first[:NONCE_SIZE], second[:NONCE_SIZE])

    def test_tampering_detected(self):
        data = bytearray(self.transform.wrap(DOCUMENT))
        data[NONCE_SIZE + 3] ^= 0x01
        with self.assertRaises(DecryptionError):
            self.transform.unwrap(bytes(data))

    def test_tampered_nonce_detected(self):
        data = bytearray(self.transform.wrap(DOCUMENT))
        data[0] ^= 0x80
        with self.assertRaises(DecryptionError):
            self.transform.unwrap(bytes(data))

    def test_wrong_key(self):
        data = self.transform.wrap(DOCUMENT)
        with self.assertRaises(DecryptionError):
            EncryptedTransform(pad_key("other")).unwrap(data)

    def test_truncated_payload(self):
        with self.assertRaises(DecryptionError):
            self.transform.unwrap(b"short")

    def test_requires_full_width_key(self):
        with self.assertRaises(InvalidKeyLength):
            EncryptedTransform(b"short")

    def test_authentic_payload_with_invalid_utf8(self):
        nonce = os.urandom(NONCE_SIZE)
        sealed = AESGCM(pad_key("secret")).encrypt(nonce, b"\xff\xfe", None)
        with self.assertRaises(EncodingError):
            self.transform.unwrap(nonce + sealed)


if __name__ == "__main__":
    unittest.main()
