"""
Addresses shared by every program
"""

# System Program
SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"

# Rent Sysvar
RENT_SYSVAR_ID = "SysvarRent111111111111111111111111111111111"

# Clock Sysvar (stake and IDO programs read timestamps)
CLOCK_SYSVAR_ID = "SysvarC1ock11111111111111111111111111111111"

# Default SPL programs
DEFAULT_SPLT_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
DEFAULT_SPLATA_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"
