"""
HakooLab Calculator Library
===========================
Importing this package registers every calculator with the catalog.

Categories:
- Hydraulics: velocity, pump power, TDH, affinity laws, NPSH, process flow
- Electrical: three-phase current, voltage drop, energy cost
- RO: recovery / flux / SEC, brine balance, osmotic pressure, TDS
- Indices: LSI with the legacy RSI, LSI with the Ryznar index
- Dosing: dilution, chlorine, acid / alkali, solution strength
- Conversions: flow, temperature, hardness and table converters
- General: surface area, molecular weight, ideal gas
"""

from .hydraulics import (
    FlowVelocityCalculator,
    PumpPowerCalculator,
    TDHCalculator,
    AffinityCalculator,
    NPSHCalculator,
    ProcessFlowCalculator,
)
from .electrical import ThreePhaseCalculator, VoltageDropCalculator, EnergyCostCalculator
from .ro import ROBasicsCalculator, BrineCalculator, OsmoticPressureCalculator, TDSConverterCalculator
from .indices import LSICalculator, LSIRSICalculator
from .dosing import (
    DilutionCalculator,
    ChlorineDoseCalculator,
    AcidAlkaliDoseCalculator,
    SolutionStrengthCalculator,
)
from .conversions import (
    FlowConverterCalculator,
    TemperatureConverterCalculator,
    HardnessConverterCalculator,
    TableConverter,
    PressureConverterCalculator,
    LengthConverterCalculator,
    MassConverterCalculator,
    VolumeConverterCalculator,
    VolumeFlowConverterCalculator,
)
from .general import SurfaceAreaCalculator, MolecularWeightCalculator, IdealGasCalculator
