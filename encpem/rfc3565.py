# vim: set et ai ts=4 sts=4 sw=4:
"""
AES-CBC encryption schemes, as used for the ``encryptionScheme`` of PBES2.
See RFC 3565, section 4.1 and RFC 8018, section B.2.5::

    AES-IV ::= OCTET STRING (SIZE(16))
"""
from pyasn1.codec.der import encoder
from pyasn1.type import univ
from Cryptodome.Cipher import AES

from .algorithms import EncryptionScheme, algorithm_registry
from .util import BadDataLengthException, BadParameterValueException, add_pkcs7_padding, strip_pkcs7_padding

__all__ = ['AES128_CBC_OID', 'AES192_CBC_OID', 'AES256_CBC_OID', 'AES_IV_SIZE',
           'AbstractAesCbc', 'AES128_CBC', 'AES192_CBC', 'AES256_CBC', 'ENCRYPTION_SCHEMES']

AES128_CBC_OID = (2,16,840,1,101,3,4,1,2)
AES192_CBC_OID = (2,16,840,1,101,3,4,1,22)
AES256_CBC_OID = (2,16,840,1,101,3,4,1,42)

AES_IV_SIZE = AES.block_size


class AbstractAesCbc(EncryptionScheme):
    """AES in CBC mode with PKCS#7 padding; the parameters are the 16-byte IV."""

    @classmethod
    def decode_parameters(cls, node):
        iv = node.as_octet_string()
        if len(iv) != AES_IV_SIZE:
            raise BadParameterValueException("%s: expected %d-byte IV, found %d bytes" % (cls.__name__, AES_IV_SIZE, len(iv)))
        return iv

    def encode_parameters(self):
        return encoder.encode(univ.OctetString(self.parameters))

    @property
    def iv(self):
        return self.parameters

    def encrypt(self, key, data):
        cipher = AES.new(key, AES.MODE_CBC, iv=self.iv)
        return cipher.encrypt(add_pkcs7_padding(data, AES.block_size))

    def decrypt(self, key, data):
        if len(data) % AES.block_size != 0:
            raise BadDataLengthException("encrypted data length is not a multiple of %d bytes" % AES.block_size)
        cipher = AES.new(key, AES.MODE_CBC, iv=self.iv)
        return strip_pkcs7_padding(cipher.decrypt(data), AES.block_size)


class AES128_CBC(AbstractAesCbc):
    algorithm_oid = AES128_CBC_OID
    key_size = 16

class AES192_CBC(AbstractAesCbc):
    algorithm_oid = AES192_CBC_OID
    key_size = 24

class AES256_CBC(AbstractAesCbc):
    algorithm_oid = AES256_CBC_OID
    key_size = 32


ENCRYPTION_SCHEMES = algorithm_registry([AES128_CBC, AES192_CBC, AES256_CBC])
