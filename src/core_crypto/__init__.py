# Core Cryptography Module
"""
Threefish-256 implementation including:
- 64-bit word arithmetic
- Key schedule (19 subkeys from key + tweak)
- MIX function and its inverse
- Traced 72-round encryption/decryption
"""
