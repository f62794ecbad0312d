"""
Physical constants for the radiation and snow models.
"""

# Temperature
TFRZ = 273.15  # Freezing point [K]
T_OFFSET_SW = 273.0  # Kelvin offset used by the Corripio water vapour terms

# Radiation
STEFAN_BOLTZMANN = 5.670373e-8  # [W/(m²·K⁴)]
SOLAR_CONSTANT = 1370.0  # [W/m²]
SW_PLAUSIBLE_MAX = 3000.0  # Upper bound for surface shortwave [W/m²]

# Atmosphere
ATM = 1013.25  # Standard sea level pressure [hPa]
OMEGA_0 = 0.9  # Aerosol single-scattering albedo
FORWARD_SCATTER = 0.74  # Fraction of aerosol scatter towards the ground
BETA_S_MAX_ELEVATION = 3000.0  # Elevation cap of the transmittance bonus [m]

# Humidity
DEFAULT_RH = 70.0  # Relative humidity used when missing [%]

# Timestep of the snowpack integration [step]
DT_SNOW = 1.0
