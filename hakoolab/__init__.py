"""
HakooLab
========
Water-treatment engineering calculators: formulas, catalog and API.
"""

__version__ = "1.0.0"
