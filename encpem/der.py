# vim: set et ai ts=4 sts=4 sw=4:
"""
Thin node layer over pyasn1's DER decoder.

A :class:`DerNode` holds the encoding of exactly one TLV. Composite
nodes are split into their children by decoding them as a
``SEQUENCE OF ANY``; leaves are decoded against a single pyasn1 type,
so a wrong tag surfaces as a structural error rather than as a value
of the wrong type. Every decoded value must re-encode to the exact
bytes it came from; BER-only forms (long-form or indefinite lengths,
constructed strings, non-minimal integers) are rejected.
"""
from pyasn1.codec.der import decoder, encoder
from pyasn1.error import PyAsn1Error
from pyasn1.type import univ

from .util import BadAsn1StructureException, FieldCountMismatchException


class DerNode(object):
    """A single DER-encoded TLV, not yet interpreted."""

    def __init__(self, encoded):
        self.encoded = bytes(encoded)

    @classmethod
    def loads(cls, data):
        """
        Isolates the TLV in ``data``.

        DER form is checked when the node is interpreted (see :meth:`children` and the
        ``as_*`` methods), not here.

        :raises BadAsn1StructureException: If ``data`` is not a single, complete TLV.
        """
        if not data:
            raise BadAsn1StructureException("Empty DER structure")
        try:
            value, rest = decoder.decode(bytes(data), asn1Spec=univ.Any())
        except PyAsn1Error as e:
            raise BadAsn1StructureException("Malformed DER structure: %s" % e)
        if rest:
            raise BadAsn1StructureException("Found %d bytes of trailing data after DER structure" % len(rest))
        return cls(value.asOctets())

    def children(self):
        """
        Returns the child nodes of this SEQUENCE, in encoding order.

        :raises BadAsn1StructureException: If this node is not a SEQUENCE.
        """
        seq = self._decode_as(univ.SequenceOf(componentType=univ.Any()), "SEQUENCE")
        return [DerNode(seq[idx].asOctets()) for idx in range(len(seq))]

    def as_octet_string(self):
        return self._decode_as(univ.OctetString(), "OCTET STRING").asOctets()

    def as_integer(self):
        return int(self._decode_as(univ.Integer(), "INTEGER"))

    def as_object_identifier(self):
        return self._decode_as(univ.ObjectIdentifier(), "OBJECT IDENTIFIER").asTuple()

    def as_null(self):
        self._decode_as(univ.Null(), "NULL")
        return None

    def _decode_as(self, spec, kind):
        try:
            value, rest = decoder.decode(self.encoded, asn1Spec=spec)
        except PyAsn1Error as e:
            raise BadAsn1StructureException("Expected %s: %s" % (kind, e))
        if rest:
            raise BadAsn1StructureException("Found %d bytes of trailing data after %s" % (len(rest), kind))
        try:
            canonical = encoder.encode(value)
        except PyAsn1Error as e:
            raise BadAsn1StructureException("Cannot re-encode %s: %s" % (kind, e))
        if canonical != self.encoded:
            raise BadAsn1StructureException("%s is not in DER form" % kind)
        return value

    def __eq__(self, other):
        return isinstance(other, DerNode) and self.encoded == other.encoded

    def __hash__(self):
        return hash(self.encoded)

    def __repr__(self):
        return "DerNode(%r)" % (self.encoded,)


class SequenceReader(object):
    """
    Cursor over the children of a SEQUENCE node with a fixed field order.

    ``kind`` names the structure being read and only serves error messages.
    """

    def __init__(self, node, kind):
        self.kind = kind
        self._children = node.children()
        self._pos = 0

    def read(self, field):
        if self._pos >= len(self._children):
            raise FieldCountMismatchException("%s: missing field '%s' (found %d fields)" % (self.kind, field, len(self._children)))
        child = self._children[self._pos]
        self._pos += 1
        return child

    def finish(self):
        remaining = len(self._children) - self._pos
        if remaining:
            raise FieldCountMismatchException("%s: %d unexpected trailing field(s); expected %d fields, found %d" %
                                              (self.kind, remaining, self._pos, len(self._children)))
