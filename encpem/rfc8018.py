# vim: set et ai ts=4 sts=4 sw=4:
"""
PKCS #5 v2.1 (RFC 8018) password-based encryption: PBES2 with PBKDF2.

Only the fully explicit form of PBKDF2-params is accepted; the optional
keyLength field and the default PRF are not::

    PBES2-params  ::= SEQUENCE { keyDerivationFunc AlgorithmIdentifier, encryptionScheme AlgorithmIdentifier }
    PBKDF2-params ::= SEQUENCE { salt OCTET STRING, iterationCount INTEGER (1..MAX), prf HashAlgId }
    HashAlgId     ::= SEQUENCE { algorithm OBJECT IDENTIFIER, parameters NULL }
"""
import logging
from collections import namedtuple
from types import MappingProxyType
from pyasn1.codec.der import encoder
from pyasn1.type import univ, namedtype
from Cryptodome.Hash import SHA256, SHA384, SHA512
from Cryptodome.Protocol.KDF import PBKDF2 as _pbkdf2

from .algorithms import EncryptionAlgorithm, KeyDerivationFunction, algorithm_registry, decode_algorithm_identifier
from .der import SequenceReader
from .rfc3565 import ENCRYPTION_SCHEMES
from .util import BadParameterValueException, UnexpectedAlgorithmException, as_hex, oid_to_str

__all__ = ['PBES2_OID', 'PBKDF2_OID', 'HMAC_WITH_SHA256_OID', 'SHA256_OID', 'SHA384_OID', 'SHA512_OID',
           'HASH_SHA256', 'HASH_SHA384', 'HASH_SHA512', 'MAX_ITERATION_COUNT', 'HASH_FUNCTIONS', 'hash_function_from_oid',
           'HashFunctionDescriptor', 'PBKDF2Parameters', 'PBKDF2', 'KEY_DERIVATION_FUNCTIONS',
           'PBES2Parameters', 'PBES2', 'ENCRYPTION_ALGORITHMS']

log = logging.getLogger(__name__)

PBES2_OID  = (1,2,840,113549,1,5,13)
PBKDF2_OID = (1,2,840,113549,1,5,12)

HMAC_WITH_SHA256_OID = (1,2,840,113549,2,9)
SHA256_OID = (2,16,840,1,101,3,4,2,1)
SHA384_OID = (2,16,840,1,101,3,4,2,2)
SHA512_OID = (2,16,840,1,101,3,4,2,3)

HASH_SHA256 = "SHA-256"
HASH_SHA384 = "SHA-384"
HASH_SHA512 = "SHA-512"

# upper bound enforced when deriving keys; decoding accepts any count >= 1
MAX_ITERATION_COUNT = 10000000

# many-to-one: both the plain digest OID and hmacWithSHA256 select SHA-256
HASH_FUNCTIONS = MappingProxyType({
    SHA256_OID: HASH_SHA256,
    HMAC_WITH_SHA256_OID: HASH_SHA256,
    SHA384_OID: HASH_SHA384,
    SHA512_OID: HASH_SHA512,
})

# OID written when encoding; each one maps back to the same hash in HASH_FUNCTIONS
_HASH_FUNCTION_OIDS = {
    HASH_SHA256: HMAC_WITH_SHA256_OID,
    HASH_SHA384: SHA384_OID,
    HASH_SHA512: SHA512_OID,
}

_HASH_MODULES = {
    HASH_SHA256: SHA256,
    HASH_SHA384: SHA384,
    HASH_SHA512: SHA512,
}


def hash_function_from_oid(oid):
    """Returns the hash function selected by ``oid``, or ``None`` if the OID is not recognized."""
    return HASH_FUNCTIONS.get(tuple(oid))


class HashAlgorithmIdentifier(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType('algorithm', univ.ObjectIdentifier()),
        namedtype.NamedType('parameters', univ.Null())
    )

class PBKDF2Params(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType('salt', univ.OctetString()),
        namedtype.NamedType('iterationCount', univ.Integer()),
        namedtype.NamedType('prf', HashAlgorithmIdentifier())
    )

class PBES2Params(univ.Sequence):
    componentType = namedtype.NamedTypes(
        namedtype.NamedType('keyDerivationFunc', univ.Any()),
        namedtype.NamedType('encryptionScheme', univ.Any())
    )


class HashFunctionDescriptor(namedtuple('HashFunctionDescriptor', 'algorithm_oid')):
    """The PRF field of PBKDF2-params: an OID followed by a mandatory explicit NULL."""

    @classmethod
    def decode(cls, node):
        reader = SequenceReader(node, "HashAlgorithmIdentifier")
        algorithm_oid = reader.read("algorithm").as_object_identifier()
        reader.read("parameters").as_null()
        reader.finish()
        return cls(algorithm_oid)

    @property
    def hash_function(self):
        return hash_function_from_oid(self.algorithm_oid)

    def _to_asn1(self):
        prf = HashAlgorithmIdentifier()
        prf.setComponentByName('algorithm', self.algorithm_oid)
        prf.setComponentByName('parameters', univ.Null(''))
        return prf

    def encode(self):
        return encoder.encode(self._to_asn1())


class PBKDF2Parameters(namedtuple('PBKDF2Parameters', 'salt iteration_count hash_function')):
    """
    Decoded PBKDF2-params.

    ``salt`` is a byte string (possibly empty), ``iteration_count`` is at least 1 and
    ``hash_function`` is one of :data:`HASH_SHA256`, :data:`HASH_SHA384` or :data:`HASH_SHA512`.
    """

    @classmethod
    def decode(cls, node):
        """
        :raises FieldCountMismatchException: If there are not exactly three fields (e.g. the PRF is omitted).
        :raises BadAsn1StructureException: If a field has the wrong type (e.g. a keyLength INTEGER sits where the PRF belongs).
        :raises BadParameterValueException: If the iteration count is below 1.
        :raises UnexpectedAlgorithmException: If the PRF OID is not a supported hash function.
        """
        reader = SequenceReader(node, "PBKDF2-params")
        salt = reader.read("salt").as_octet_string()
        iteration_count = reader.read("iterationCount").as_integer()
        prf = HashFunctionDescriptor.decode(reader.read("prf"))
        reader.finish()

        if iteration_count < 1:
            raise BadParameterValueException("PBKDF2-params: iteration count must be at least 1, found %d" % iteration_count)

        hash_function = prf.hash_function
        if hash_function is None:
            raise UnexpectedAlgorithmException("PBKDF2-params: unsupported hash function OID %s" % oid_to_str(prf.algorithm_oid))

        return cls(salt, iteration_count, hash_function)

    def encode(self):
        params = PBKDF2Params()
        params.setComponentByName('salt', self.salt)
        params.setComponentByName('iterationCount', self.iteration_count)
        prf = HashFunctionDescriptor(_HASH_FUNCTION_OIDS[self.hash_function])
        params.setComponentByName('prf', prf._to_asn1())
        return encoder.encode(params)


class PBKDF2(KeyDerivationFunction):
    algorithm_oid = PBKDF2_OID
    parameters_type = PBKDF2Parameters

    def derive_key(self, password, key_length):
        """
        :raises BadParameterValueException: If the iteration count exceeds :data:`MAX_ITERATION_COUNT`.
        """
        params = self.parameters
        if params.iteration_count > MAX_ITERATION_COUNT:
            raise BadParameterValueException("PBKDF2: iteration count %d exceeds the maximum of %d" %
                                             (params.iteration_count, MAX_ITERATION_COUNT))
        if isinstance(password, str):
            password = password.encode('utf-8')
        return _pbkdf2(password, params.salt, dkLen=key_length, count=params.iteration_count,
                       hmac_hash_module=_HASH_MODULES[params.hash_function])


KEY_DERIVATION_FUNCTIONS = algorithm_registry([PBKDF2])


class PBES2Parameters(namedtuple('PBES2Parameters', 'key_derivation_function encryption_scheme')):
    """
    Decoded PBES2-params: a :class:`PBKDF2` descriptor followed by an
    encryption scheme descriptor (see :mod:`encpem.rfc3565`), in that order.
    """

    @classmethod
    def decode(cls, node):
        reader = SequenceReader(node, "PBES2-params")
        key_derivation_function = decode_algorithm_identifier(reader.read("keyDerivationFunc"), KEY_DERIVATION_FUNCTIONS)
        encryption_scheme = decode_algorithm_identifier(reader.read("encryptionScheme"), ENCRYPTION_SCHEMES)
        reader.finish()

        kdf_params = key_derivation_function.parameters
        log.debug("PBES2: %s with %d iterations, salt %s; encryption scheme %s",
                  kdf_params.hash_function, kdf_params.iteration_count, as_hex(kdf_params.salt),
                  type(encryption_scheme).__name__)
        return cls(key_derivation_function, encryption_scheme)

    def encode(self):
        params = PBES2Params()
        params.setComponentByName('keyDerivationFunc', self.key_derivation_function.encode())
        params.setComponentByName('encryptionScheme', self.encryption_scheme.encode())
        return encoder.encode(params)


class PBES2(EncryptionAlgorithm):
    algorithm_oid = PBES2_OID
    parameters_type = PBES2Parameters

    def _derive_key(self, password):
        scheme = self.parameters.encryption_scheme
        return self.parameters.key_derivation_function.derive_key(password, scheme.key_size)

    def encrypt(self, data, password):
        return self.parameters.encryption_scheme.encrypt(self._derive_key(password), data)

    def decrypt(self, data, password):
        return self.parameters.encryption_scheme.decrypt(self._derive_key(password), data)


ENCRYPTION_ALGORITHMS = algorithm_registry([PBES2])
