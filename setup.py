"""PyEncPEM decodes the PKCS#5 v2.1 (RFC 8018) PBES2 and PBKDF2 algorithm
parameters of password-encrypted private keys, and decrypts the
``ENCRYPTED PRIVATE KEY`` PEM documents that carry them. Simply::

  pip install pyencpem

Then::

  import encpem

  doc = encpem.EncryptedPEMDocument.load('key.pem')

  print(doc.encryption_algorithm.parameters)
  print(doc.decrypt('passphrase').pkey_pkcs8)

Only PBES2 with PBKDF2 (HMAC-SHA-256/384/512) and AES-CBC is supported;
anything else fails with a clean exception.

"""

from setuptools import setup, find_packages


setup(
    name='pyencpem',
    version='1.0.0',
    description='Pure-Python PKCS#5 PBES2/PBKDF2 parameter decoding for encrypted PEM private keys',
    keywords="PKCS5 PKCS8 PBES2 PBKDF2 PEM encrypted private key ASN.1",
    license="MIT",
    long_description=__doc__,
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        'Topic :: Security :: Cryptography',
        'Topic :: Software Development :: Libraries',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3',
    ],
    packages=find_packages(exclude=['tests']),
    python_requires='>=3.6',
    install_requires=['pyasn1>=0.4.1',
                      'pyasn1_modules>=0.2.1',
                      'pycryptodomex>=3.6'],
)


"""
Releasing:

* Update version in setup.py, as well as __version__ and __version_info__ in encpem/__init__.py
* Final test (python -m unittest discover tests)
* Commit: "bumping version for x.x.x release"
* Run: python setup.py sdist bdist_wheel upload
* git tag -a vx.x.x -m "summary"
* Update versions again for dev
* Commit: "bumping version for x.x.x+1 dev"
* git push && git push --tags
"""
