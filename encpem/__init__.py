# vim: set et ai ts=4 sts=4 sw=4:
"""
Decoding of PKCS#5 v2.1 (RFC 8018) PBES2/PBKDF2 algorithm parameters, and
decryption of the ``ENCRYPTED PRIVATE KEY`` PEM documents that carry them.
"""
from .util import *
from .der import DerNode, SequenceReader
from .algorithms import *
from .rfc3565 import *
from .rfc8018 import *
from .pem import *

__version_info__ = (1, 0, 0, 'dev')
__version__ = ".".join(str(x) for x in __version_info__ if str(x))
