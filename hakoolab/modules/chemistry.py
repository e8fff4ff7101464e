"""
HakooLab General Chemistry

Atomic weights (IUPAC standard values, H through Bi), molecular weight
from a chemical formula and the ideal gas law.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from .validation import must_positive

GAS_CONSTANT_L_ATM = 0.0821  # L.atm/(mol.K)

ATOMIC_WEIGHTS: Mapping[str, float] = MappingProxyType({
    "H": 1.008, "He": 4.003, "Li": 6.94, "Be": 9.012, "B": 10.81, "C": 12.011,
    "N": 14.007, "O": 15.999, "F": 18.998, "Ne": 20.180, "Na": 22.990,
    "Mg": 24.305, "Al": 26.982, "Si": 28.085, "P": 30.974, "S": 32.06,
    "Cl": 35.45, "Ar": 39.948, "K": 39.098, "Ca": 40.078, "Sc": 44.956,
    "Ti": 47.867, "V": 50.942, "Cr": 51.996, "Mn": 54.938, "Fe": 55.845,
    "Co": 58.933, "Ni": 58.693, "Cu": 63.546, "Zn": 65.38, "Ga": 69.723,
    "Ge": 72.630, "As": 74.922, "Se": 78.971, "Br": 79.904, "Kr": 83.798,
    "Rb": 85.468, "Sr": 87.62, "Y": 88.906, "Zr": 91.224, "Nb": 92.906,
    "Mo": 95.95, "Tc": 98, "Ru": 101.07, "Rh": 102.906, "Pd": 106.42,
    "Ag": 107.868, "Cd": 112.411, "In": 114.818, "Sn": 118.710, "Sb": 121.760,
    "Te": 127.60, "I": 126.904, "Xe": 131.293, "Cs": 132.905, "Ba": 137.327,
    "La": 138.905, "Ce": 140.116, "Pr": 140.908, "Nd": 144.242, "Pm": 145,
    "Sm": 150.36, "Eu": 151.964, "Gd": 157.25, "Tb": 158.925, "Dy": 162.500,
    "Ho": 164.930, "Er": 167.259, "Tm": 168.934, "Yb": 173.045, "Lu": 174.967,
    "Hf": 178.49, "Ta": 180.948, "W": 183.84, "Re": 186.207, "Os": 190.23,
    "Ir": 192.217, "Pt": 195.084, "Au": 196.967, "Hg": 200.592, "Tl": 204.38,
    "Pb": 207.2, "Bi": 208.980,
})

# Common water-treatment compounds for quick selection
COMMON_COMPOUNDS = {
    "H2O": "Water",
    "NaCl": "Sodium chloride",
    "CaCO3": "Calcium carbonate",
    "H2SO4": "Sulfuric acid",
    "NaOCl": "Sodium hypochlorite",
    "Ca(OH)2": "Calcium hydroxide",
    "CaCl2": "Calcium chloride",
    "C6H12O6": "Glucose",
}

_TOKEN = re.compile(r"([A-Z][a-z]?)(\d*)|(\()|(\))(\d*)|(\S)")


@dataclass
class IdealGas:
    p_atm: float
    v_l: float
    n_mol: float
    t_k: float
    solved_for: str


def molecular_weight(formula: str) -> float:
    """
    Molar mass (g/mol) of a formula such as "CaCO3" or "Ca(OH)2".

    Raises:
        ValueError: empty formula, unknown element or unbalanced brackets

    Example:
        >>> round(molecular_weight("NaCl"), 2)
        58.44
    """
    formula = (formula or "").strip()
    if not formula:
        raise ValueError("Invalid chemical formula")

    stack = [0.0]
    for element, count, open_bracket, close_bracket, group_count, other in _TOKEN.findall(formula):
        if element:
            if element not in ATOMIC_WEIGHTS:
                raise ValueError(f"Unknown element: {element}")
            stack[-1] += ATOMIC_WEIGHTS[element] * (int(count) if count else 1)
        elif open_bracket:
            stack.append(0.0)
        elif close_bracket:
            if len(stack) == 1:
                raise ValueError(f"Unbalanced brackets in formula: {formula}")
            group = stack.pop()
            stack[-1] += group * (int(group_count) if group_count else 1)
        else:
            raise ValueError(f"Invalid character in formula: {other}")

    if len(stack) != 1:
        raise ValueError(f"Unbalanced brackets in formula: {formula}")
    if stack[0] <= 0:
        raise ValueError("Invalid chemical formula")
    return stack[0]


def ideal_gas(
    p_atm: Optional[float] = None,
    v_l: Optional[float] = None,
    n_mol: Optional[float] = None,
    t_k: Optional[float] = None,
) -> IdealGas:
    """Solve PV = nRT for the single variable left as None."""
    known = {"p_atm": p_atm, "v_l": v_l, "n_mol": n_mol, "t_k": t_k}
    missing = [name for name, value in known.items() if value is None]
    if len(missing) != 1:
        raise ValueError("Give exactly three of P, V, n, T to solve for the fourth")

    for name, value in known.items():
        if value is not None:
            must_positive(value, name)

    r = GAS_CONSTANT_L_ATM
    unknown = missing[0]
    if unknown == "p_atm":
        p_atm = n_mol * r * t_k / v_l
    elif unknown == "v_l":
        v_l = n_mol * r * t_k / p_atm
    elif unknown == "n_mol":
        n_mol = p_atm * v_l / (r * t_k)
    else:
        t_k = p_atm * v_l / (n_mol * r)

    return IdealGas(p_atm=p_atm, v_l=v_l, n_mol=n_mol, t_k=t_k, solved_for=unknown)
