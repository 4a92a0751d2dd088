# vim: set et ai ts=4 sts=4 sw=4:
import textwrap
import base64


class EncryptedPemException(Exception):
    """Superclass for all encpem exceptions."""
    pass
class BadPemFormatException(EncryptedPemException):
    """Signifies that the PEM framing or the outer EncryptedPrivateKeyInfo structure is malformed."""
    pass
class BadDataLengthException(EncryptedPemException):
    """Signifies that given input data was of wrong or unexpected length."""
    pass
class BadPaddingException(EncryptedPemException):
    """Signifies that bad padding was encountered during decryption."""
    pass
class DecryptionFailureException(EncryptedPemException):
    """Signifies failure to decrypt a value."""
    pass
class AlgorithmParametersException(EncryptedPemException):
    """
    Superclass for failures to decode an algorithm descriptor or its parameters.

    Callers that decrypt on behalf of an end user should not report which subclass occurred;
    see :meth:`encpem.pem.EncryptedPEMDocument.decrypt`.
    """
    pass
class BadAsn1StructureException(AlgorithmParametersException):
    """Signifies a wrong tag or type where a SEQUENCE, OCTET STRING, INTEGER, OBJECT IDENTIFIER or NULL was required."""
    pass
class FieldCountMismatchException(AlgorithmParametersException):
    """Signifies that a SEQUENCE had too few or too many children for its schema."""
    pass
class UnexpectedAlgorithmException(AlgorithmParametersException):
    """Signifies that an object identifier outside of the supported set was encountered."""
    pass
class BadParameterValueException(AlgorithmParametersException):
    """Signifies a structurally valid value outside of its permitted range (e.g. an iteration count below 1)."""
    pass


def oid_to_str(oid):
    return ".".join(str(i) for i in oid)

def as_hex(ba):
    return "".join("{:02x}".format(b) for b in bytearray(ba))

def as_pem(der_bytes, type):
    result = "-----BEGIN %s-----\n" % type
    result += "\n".join(textwrap.wrap(base64.b64encode(der_bytes).decode('ascii'), 64))
    result += "\n-----END %s-----" % type
    return result

def strip_pkcs7_padding(m, block_size):
    """
    Drop PKCS#7 padding: N octets each with value N, where 1 <= N <= block_size.
    """
    if len(m) < block_size or len(m) % block_size != 0:
        raise BadPaddingException("Unable to strip padding: invalid message length")

    m = bytearray(m)
    last_byte = m[-1]
    # the <last_byte> bytes of m must all have value <last_byte>, otherwise something's wrong
    if (last_byte <= 0 or last_byte > block_size) or (m[-last_byte:] != bytearray([last_byte])*last_byte):
        raise BadPaddingException("Unable to strip padding: invalid padding found")

    return bytes(m[:-last_byte])

def add_pkcs7_padding(m, block_size):
    if block_size <= 0 or block_size > 255:
        raise ValueError("Invalid block size")

    m = bytearray(m)
    num_padding_bytes = block_size - (len(m) % block_size)
    m = m + bytearray([num_padding_bytes]*num_padding_bytes)
    return bytes(m)
