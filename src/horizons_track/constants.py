"""Fixed constants: unit conversions, sidereal-time polynomial, parser defaults."""

from datetime import datetime, timezone

# Distance
KM_PER_AU = 149_597_870.7

# Time: seconds per unit and Julian date reference epochs
SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0
SECONDS_PER_DAY = 86400.0
DAYS_PER_JULIAN_CENTURY = 36525.0
JD_J2000 = 2451545.0  # 2000-01-01 12:00 TT, epoch of the GMST polynomial
JD_2000_JAN_1_MIDNIGHT = 2451544.5  # Julian date of day 0 in rms-julian numbering

# Greenwich mean sidereal time polynomial (degrees)
GMST_DEG_AT_J2000 = 280.46061837
GMST_DEG_PER_DAY = 360.98564736629
GMST_T2_COEFF = 0.000387933
GMST_T3_DIVISOR = 38710000.0

# Angle: sexagesimal
MINUTES_PER_HOUR = 60.0
ARCMIN_PER_DEGREE = 60.0
ARCSEC_PER_DEGREE = 3600.0
DEGREES_PER_HOUR_RA = 15.0  # right ascension: 360° / 24 h
HOURS_PER_DAY = 24.0

# Radii used when a header declares none (km)
DEFAULT_RADIUS_KM = 1000.0
DEFAULT_RADII_KM = (DEFAULT_RADIUS_KM, DEFAULT_RADIUS_KM, DEFAULT_RADIUS_KM)

# Timestamp given to samples whose date could not be parsed
SENTINEL_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

# Direction used for a state vector of zero length
FALLBACK_DIRECTION = (1.0, 0.0, 0.0)

# Smallest bracketing interval (seconds) used as an interpolation denominator
MIN_INTERPOLATION_SECONDS = 1e-6

# Minimum numeric tokens for the columnar angular-row layout; index of range (AU)
MIN_COLUMNAR_TOKENS = 9
COLUMNAR_RANGE_INDEX = 8

# Data block markers
START_OF_EPHEMERIS = '$$SOE'
END_OF_EPHEMERIS = '$$EOE'

# Defaults and thresholds (configuration)
DEFAULT_UNITS_PER_AU = 500.0
DEFAULT_STEP_TOLERANCE_SECONDS = 1.0
DEFAULT_FILE_ENCODING = 'utf-8'
FALLBACK_FILE_ENCODING = 'latin-1'
