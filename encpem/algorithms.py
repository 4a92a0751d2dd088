# vim: set et ai ts=4 sts=4 sw=4:
"""
Generic decode contract for OID-selected algorithms.

Every concrete algorithm class declares the OID that selects it in its
``algorithm_oid`` class attribute, and knows how to decode its own
parameter body. The AlgorithmIdentifier envelope itself::

    AlgorithmIdentifier ::= SEQUENCE {
        algorithm   OBJECT IDENTIFIER,
        parameters  ANY DEFINED BY algorithm
    }

is read by :func:`decode_algorithm_identifier`, which looks the OID up
in a registry built by :func:`algorithm_registry` and hands the whole
node over to the selected class.
"""
import logging
from types import MappingProxyType
from pyasn1.codec.der import encoder
from pyasn1_modules.rfc2459 import AlgorithmIdentifier

from .der import SequenceReader
from .util import UnexpectedAlgorithmException, oid_to_str

__all__ = ['AbstractAlgorithm', 'KeyDerivationFunction', 'EncryptionScheme', 'EncryptionAlgorithm',
           'algorithm_registry', 'decode_algorithm_identifier']

log = logging.getLogger(__name__)


class AbstractAlgorithm(object):
    """
    Abstract superclass for algorithm descriptors.

    Instances are immutable; two descriptors compare equal when they are of the same
    concrete class and carry equal parameters.
    """
    algorithm_oid = None  #: The OID selecting this algorithm, as a tuple of ints. Identical for every instance.
    parameters_type = None  #: Class whose ``decode(node)`` classmethod decodes the parameter body.

    def __init__(self, parameters):
        self._parameters = parameters

    @property
    def parameters(self):
        return self._parameters

    @classmethod
    def new(cls, parameters):
        """
        Helper function to create a new descriptor from already-constructed parameters.
        """
        return cls(parameters)

    @classmethod
    def decode(cls, node):
        """
        Decodes an AlgorithmIdentifier node known to select this algorithm.

        The OID is checked against :attr:`algorithm_oid` even when the node was selected by
        :func:`decode_algorithm_identifier`, so that this method is safe to call directly.

        :raises BadAsn1StructureException: If the node or one of its fields has the wrong type.
        :raises FieldCountMismatchException: If the parameters are missing or followed by extra fields.
        :raises UnexpectedAlgorithmException: If the OID does not select this algorithm.
        """
        reader = SequenceReader(node, "%s AlgorithmIdentifier" % cls.__name__)
        oid = reader.read("algorithm").as_object_identifier()
        if oid != cls.algorithm_oid:
            raise UnexpectedAlgorithmException("Expected %s (OID %s), found OID %s" %
                                               (cls.__name__, oid_to_str(cls.algorithm_oid), oid_to_str(oid)))
        parameters = cls.decode_parameters(reader.read("parameters"))
        reader.finish()
        return cls.new(parameters)

    @classmethod
    def decode_parameters(cls, node):
        return cls.parameters_type.decode(node)

    def encode_parameters(self):
        return self.parameters.encode()

    def encode(self):
        """Returns the DER encoding of this descriptor as an AlgorithmIdentifier."""
        a = AlgorithmIdentifier()
        a.setComponentByName('algorithm', self.algorithm_oid)
        a.setComponentByName('parameters', self.encode_parameters())
        return encoder.encode(a)

    def __eq__(self, other):
        return type(self) is type(other) and self.parameters == other.parameters

    def __hash__(self):
        return hash((type(self), self.parameters))

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.parameters)


class KeyDerivationFunction(AbstractAlgorithm):
    """Abstract superclass for key derivation functions, such as PBKDF2."""

    def derive_key(self, password, key_length):
        """
        Derives ``key_length`` bytes of key material from ``password`` using this
        descriptor's parameters.
        """
        raise NotImplementedError("Abstract method")


class EncryptionScheme(AbstractAlgorithm):
    """Abstract superclass for the symmetric ciphers used underneath password-based encryption."""
    key_size = None  #: Key size in bytes.

    def encrypt(self, key, data):
        raise NotImplementedError("Abstract method")

    def decrypt(self, key, data):
        raise NotImplementedError("Abstract method")


class EncryptionAlgorithm(AbstractAlgorithm):
    """Abstract superclass for password-based encryption algorithms, such as PBES2."""

    def encrypt(self, data, password):
        raise NotImplementedError("Abstract method")

    def decrypt(self, data, password):
        """
        Decrypts ``data`` with a key derived from ``password``.

        :raises BadDataLengthException: If the data length does not fit the cipher.
        :raises BadPaddingException: If the decrypted data is not correctly padded; usually a wrong password.
        """
        raise NotImplementedError("Abstract method")


def algorithm_registry(algorithm_classes):
    """
    Builds a read-only, OID-keyed lookup table for :func:`decode_algorithm_identifier`.
    """
    registry = {}
    for algorithm_class in algorithm_classes:
        if algorithm_class.algorithm_oid in registry:
            raise ValueError("Duplicate algorithm OID %s" % oid_to_str(algorithm_class.algorithm_oid))
        registry[algorithm_class.algorithm_oid] = algorithm_class
    return MappingProxyType(registry)


def decode_algorithm_identifier(node, registry):
    """
    Reads the OID of an AlgorithmIdentifier node and decodes the node with the class
    registered for it.

    :param DerNode node: The AlgorithmIdentifier SEQUENCE.
    :param dict registry: OID to algorithm class, as built by :func:`algorithm_registry`.
    :raises UnexpectedAlgorithmException: If no class is registered for the OID.
    """
    oid = SequenceReader(node, "AlgorithmIdentifier").read("algorithm").as_object_identifier()
    algorithm_class = registry.get(oid)
    if algorithm_class is None:
        raise UnexpectedAlgorithmException("Unsupported algorithm: OID %s" % oid_to_str(oid))
    log.debug("OID %s selects %s", oid_to_str(oid), algorithm_class.__name__)
    return algorithm_class.decode(node)
