"""Physical constants used throughout JetCycle.

All values in SI units unless otherwise noted.
"""

# Gravitational
G_0 = 9.80665  # m/s² — standard gravitational acceleration

# Air (calorically perfect gas)
GAMMA_AIR = 1.4
CP_AIR = 1005.0  # J/(kg·K)
R_AIR = 287.05  # J/(kg·K) — specific gas constant of dry air

# Isentropic exponents for gamma = 1.4
ISENTROPIC_EXP = GAMMA_AIR / (GAMMA_AIR - 1.0)  # 3.5, T-ratio -> P-ratio
ISENTROPIC_EXP_INV = 0.286  # (γ-1)/γ, rounded as used in compressor maps

# International Standard Atmosphere, sea level
P_SL = 101325.0  # Pa
T_SL = 288.15  # K
RHO_SL = 1.225  # kg/m³

# ISA troposphere
LAPSE_RATE = 0.0065  # K/m
T_TROPOPAUSE = 216.65  # K
H_TROPOPAUSE = 11000.0  # m
BARO_COEFF = 2.25577e-5  # 1/m
BARO_EXP = 5.2559

# Kerosene–air
STOICHIOMETRIC_AFR = 14.7

# Flight speed reference (speed of sound at sea level)
A_SL = 340.3  # m/s

# Conversion factors
FT_TO_M = 0.3048
M_TO_FT = 1.0 / FT_TO_M
PA_TO_KPA = 1.0e-3
MPA_TO_PA = 1.0e6
SECONDS_PER_HOUR = 3600.0
