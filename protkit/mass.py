"""
Peptide mass and m/z calculation.

Parses peptide sequences with embedded ``(UniMod:<id>)`` annotations,
sums monoisotopic residue masses, modification deltas and the protons
added by the charge state, and returns the m/z and total peptide mass.
"""

import numbers
import re
from collections import namedtuple
from types import MappingProxyType


# Monoisotopic residue masses (Da)
RESIDUE_MASSES = MappingProxyType({
    'A': 71.03711,   # Alanine
    'R': 156.10111,  # Arginine
    'N': 114.04293,  # Asparagine
    'D': 115.02694,  # Aspartic acid
    'C': 103.00919,  # Cysteine
    'Q': 128.05858,  # Glutamine
    'E': 129.04259,  # Glutamic acid
    'G': 57.02146,   # Glycine
    'H': 137.05891,  # Histidine
    'I': 113.08406,  # Isoleucine
    'L': 113.08406,  # Leucine
    'K': 128.09496,  # Lysine
    'M': 131.04049,  # Methionine
    'F': 147.06841,  # Phenylalanine
    'P': 97.05276,   # Proline
    'S': 87.03203,   # Serine
    'T': 101.04768,  # Threonine
    'W': 186.07931,  # Tryptophan
    'Y': 163.06333,  # Tyrosine
    'V': 99.06841,   # Valine
})

# Modification deltas (Da) keyed by UniMod accession
MODIFICATION_MASSES = MappingProxyType({
    4: 57.021,     # Carbamidomethyl
    1: 42.0106,    # Acetyl
    35: 15.9949,   # Oxidation
    21: 79.9663,   # Phospho
})

PROTON_MASS = 1.0078

# Any "(UniMod:" fragment, closed or not. Stops before the next residue
# so an unclosed annotation never swallows the rest of the peptide.
_ANNOTATION_RE = re.compile(r'\(UniMod:[^()A-Z]*\)?')

_TOKEN_RE = re.compile(
    r'\(UniMod:(?P<unimod>\d+)\)'
    r'|(?P<malformed>\(UniMod:[^()A-Z]*\)?)'
    r'|(?P<digits>\d+)'
    r'|(?P<char>.)',
    re.DOTALL,
)


MassResult = namedtuple('MassResult', ['mz', 'peptide_mass', 'charge'])
MassResult.__doc__ = """Result of an m/z calculation: m/z (Da/charge), total mass (Da), charge."""


class InvalidChargeError(ValueError):
    """Raised when the charge state is not a positive integer."""

    def __init__(self, charge):
        self.charge = charge
        super().__init__(f"Charge must be a positive integer, got {charge!r}")


class UnknownTokenError(ValueError):
    """Raised in strict mode for residues or UniMod ids missing from the mass tables."""

    def __init__(self, token, position, sequence):
        self.token = token
        self.position = position
        self.sequence = sequence
        super().__init__(
            f"Unknown token {token!r} at position {position} in '{sequence}'"
        )


def _normalize_charge(charge):
    """Return charge as a positive int or raise InvalidChargeError."""
    if isinstance(charge, bool):
        raise InvalidChargeError(charge)

    if isinstance(charge, numbers.Integral):
        value = int(charge)
    elif isinstance(charge, numbers.Real) and float(charge).is_integer():
        value = int(charge)
    else:
        raise InvalidChargeError(charge)

    if value < 1:
        raise InvalidChargeError(charge)
    return value


def _scan(peptide_sequence, strict):
    """Yield ('residue', letter) and ('mod', id) tokens from an annotated sequence."""
    for match in _TOKEN_RE.finditer(peptide_sequence):
        kind = match.lastgroup

        if kind == 'malformed':
            continue

        if kind in ('unimod', 'digits'):
            mod_id = int(match.group(kind))
            if strict and mod_id not in MODIFICATION_MASSES:
                raise UnknownTokenError(match.group(0), match.start(), peptide_sequence)
            yield 'mod', mod_id
            continue

        char = match.group('char')
        if char in RESIDUE_MASSES:
            yield 'residue', char
        elif strict:
            raise UnknownTokenError(char, match.start(), peptide_sequence)


def parse_peptide(peptide_sequence, strict=False):
    """
    Split an annotated peptide into residues and modification ids.

    Parameters
    ----------
    peptide_sequence : str
        Sequence such as ``"AC(UniMod:4)EFAGFQK"``.
    strict : bool, optional
        Raise UnknownTokenError for characters that are not standard
        residues and for UniMod ids without a known mass (default: False).

    Returns
    -------
    tuple
        ``(residues, mod_ids)``: the recognized residue letters as a string
        and the modification ids (ints) in order of appearance.

    Example
    -------
    >>> parse_peptide("AM(UniMod:35)K")
    ('AMK', [35])
    """
    residues = []
    mod_ids = []

    for kind, value in _scan(peptide_sequence, strict):
        if kind == 'residue':
            residues.append(value)
        else:
            mod_ids.append(value)

    return ''.join(residues), mod_ids


def strip_modifications(peptide_sequence):
    """Remove every ``(UniMod:...)`` annotation from a sequence."""
    return _ANNOTATION_RE.sub('', peptide_sequence)


def calculate_mz(peptide_sequence, charge, strict=False):
    """
    Calculate the m/z and total mass of a peptide at a given charge state.

    Residue masses and UniMod deltas are summed, then ``charge`` protons
    (1.0078 Da each) are added. By default residues and modification ids
    missing from the mass tables contribute zero mass; malformed
    annotations are dropped and never contribute.

    Parameters
    ----------
    peptide_sequence : str
        Peptide sequence, optionally annotated with ``(UniMod:<id>)``
        after the modified residue, e.g.
        ``"AC(UniMod:4)EFAGFQC(UniMod:4)QIQFGPHNEQK"``.
    charge : int
        Charge state (number of protons added). Must be >= 1.
    strict : bool, optional
        Raise UnknownTokenError instead of ignoring unknown residues and
        modification ids (default: False).

    Returns
    -------
    MassResult
        Named tuple with ``mz``, ``peptide_mass`` (Da) and ``charge``.

    Raises
    ------
    InvalidChargeError
        If charge is zero, negative or not an integer.
    UnknownTokenError
        In strict mode, for unknown residues or modification ids.

    Example
    -------
    >>> result = calculate_mz("AC(UniMod:4)EFAGFQC(UniMod:4)QIQFGPHNEQK", 2)
    >>> round(result.mz, 4)
    1189.5257
    """
    charge = _normalize_charge(charge)

    base_mass = 0.0
    mod_mass = 0.0

    for kind, value in _scan(peptide_sequence, strict):
        if kind == 'residue':
            base_mass += RESIDUE_MASSES[value]
        else:
            mod_mass += MODIFICATION_MASSES.get(value, 0.0)

    proton_mass = charge * PROTON_MASS
    total_mass = base_mass + mod_mass + proton_mass

    return MassResult(
        mz=total_mass / charge,
        peptide_mass=total_mass,
        charge=charge,
    )


def calculate_mz_range(peptide_sequence, charges=(1, 4), strict=False):
    """
    Calculate m/z for every charge state in an inclusive range.

    Parameters
    ----------
    peptide_sequence : str
        Annotated peptide sequence.
    charges : tuple of int, optional
        ``(min_charge, max_charge)``, inclusive (default: (1, 4)).
    strict : bool, optional
        Passed through to calculate_mz().

    Returns
    -------
    list of MassResult
        One result per charge state, lowest charge first.
    """
    min_charge, max_charge = charges
    min_charge = _normalize_charge(min_charge)
    max_charge = _normalize_charge(max_charge)

    if min_charge > max_charge:
        raise InvalidChargeError(charges)

    return [
        calculate_mz(peptide_sequence, charge, strict=strict)
        for charge in range(min_charge, max_charge + 1)
    ]
