"""
feistel_ecb - Teaching Feistel Network Block Cipher

This library implements a small Feistel network block cipher operated
in ECB mode. It exists to demonstrate the structural mechanics of
Feistel ciphers (confusion, diffusion, invertibility with a
non-invertible round function) and the pattern leakage of ECB mode.
It is NOT a secure cipher.

Key Features:
- Configurable block width (8-bit toy variant, 64-bit default)
- Pluggable round functions (AND, OR, XOR, rotate and multiply variants)
- Pluggable key schedules (table cycling, arithmetic mixing, ARX)
- Configurable padding policies for message packing
- Order-preserving parallel ECB block processing
- Diffusion and ECB leakage measurements

"""

__version__ = '0.1.0'
__author__ = 'feistel_ecb Team'
