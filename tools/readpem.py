#!/usr/bin/env python
# vim: set et ai ts=4 sw=4 sts=4:
import sys
import logging
import encpem
from encpem.util import as_pem, as_hex, oid_to_str
from argparse import ArgumentParser

def get_algorithm_metadata(doc):
    pbes2 = doc.encryption_algorithm
    kdf = pbes2.parameters.key_derivation_function
    scheme = pbes2.parameters.encryption_scheme

    result = "Encryption algorithm: %s (OID %s)\n" % (type(pbes2).__name__, oid_to_str(pbes2.algorithm_oid))
    result += "  Key derivation function: %s (OID %s)\n" % (type(kdf).__name__, oid_to_str(kdf.algorithm_oid))
    result += "    Hash function: %s\n" % (kdf.parameters.hash_function,)
    result += "    Iteration count: %d\n" % (kdf.parameters.iteration_count,)
    result += "    Salt: %s\n" % as_hex(kdf.parameters.salt)
    result += "  Encryption scheme: %s (OID %s)\n" % (type(scheme).__name__, oid_to_str(scheme.algorithm_oid))
    result += "    Key size: %d bits\n" % (scheme.key_size * 8,)
    result += "    IV: %s\n" % as_hex(scheme.iv)
    result += "Encrypted data: %d bytes\n" % len(doc.encrypted_data)
    return result

if __name__ == "__main__":
    parser = ArgumentParser(description="Utility for reading password-encrypted PKCS#8 PEM documents.")
    parser.add_argument("pem_file")
    parser.add_argument("password", nargs="?")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log decoding steps to stderr.")

    group = parser.add_mutually_exclusive_group()
    group.add_argument("-l", "--list", action="store_true", default=True, help="Print the decoded PBES2 algorithm parameters.")
    group.add_argument("-x", "--extract", action="store_true", help="Decrypt the private key and print it as an unencrypted PKCS#8 PEM document.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    doc = encpem.EncryptedPEMDocument.load(args.pem_file)

    if args.extract:
        if args.password is None:
            parser.error("a password is required to extract the private key")
        try:
            pk = doc.decrypt(args.password)
        except encpem.DecryptionFailureException as e:
            sys.exit(str(e))
        print(as_pem(pk.pkey_pkcs8, "PRIVATE KEY"))

    elif args.list:
        try:
            print(get_algorithm_metadata(doc))
        except encpem.AlgorithmParametersException as e:
            sys.exit("Unsupported or malformed algorithm parameters: %s" % e)
