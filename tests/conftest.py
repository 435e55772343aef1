"""Shared Horizons report texts and fixtures for the test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

# Geocentric observer table; RA 00h, DEC 00d (direction +X), range 1 AU.
ANGULAR_REPORT = """\
*******************************************************************************
 Revised: July 31, 2013                  Venus                           299

 GEOPHYSICAL PROPERTIES (updated 2020-Sep-08):
  Vol. Mean Radius (km) =  6051.84+-0.01  Density (g/cm^3)      =  5.204
  Equ. radius, km          = 6051.8       Mass x10^23 (kg)      = 48.685
*******************************************************************************
Ephemeris / WWW_USER Mon Jan  1 00:00:00 2024 Pasadena, USA      / Horizons
*******************************************************************************
Target body name: Venus (299)                     {source: DE441}
Center body name: Earth (399)                     {source: DE441}
*******************************************************************************
Start time      : A.D. 2024-Jan-01 00:00:00.0000 UT
Stop  time      : A.D. 2024-Jan-01 02:00:00.0000 UT
Step-size       : 60 minutes
*******************************************************************************
Target radii    : 6051.8, 6051.8, 6051.8 km       {Equator, meridian, pole}
Center radii    : 6378.137, 6378.137, 6356.752 km {Equator, meridian, pole}
*******************************************************************************
 Date__(UT)__HR:MN     R.A._____(ICRF)_____DEC  APmag   S-brt            delta      deldot
*******************************************************************************
$$SOE
 2024-Jan-01 00:00     00 00 00.00 +00 00 00.0  -4.074   1.400  1.00000000000000  -8.0122342
 2024-Jan-01 01:00     00 00 00.00 +00 00 00.0  -4.074   1.400  1.00000000000000  -8.0120981
 2024-Jan-01 02:00     00 00 00.00 +00 00 00.0  -4.074   1.400  1.00000000000000  -8.0119618
$$EOE
*******************************************************************************
Column meaning:
 delta deldot = Range and range-rate of target center with respect to the observer.
"""

# Heliocentric state vectors for Mars at 00:00, 01:00 and 02:00 TDB.
STATE_VECTOR_REPORT = """\
*******************************************************************************
Ephemeris / WWW_USER Mon Jan  1 00:00:00 2024 Pasadena, USA      / Horizons
*******************************************************************************
Target body name: Mars (499)                      {source: mar097}
Center body name: Sun (10)                        {source: DE441}
*******************************************************************************
Start time      : A.D. 2024-Jan-01 00:00:00.0000 TDB
Stop  time      : A.D. 2024-Jan-01 02:00:00.0000 TDB
Step-size       : 60 minutes
*******************************************************************************
Target radii    : 3396.19 x 3396.19 x 3376.2 km   {Equator_a, b, pole_c}
Center radii    : 695700.0, 695700.0, 695700.0 km {Equator, meridian, pole}
Output units    : KM-S
Output type     : GEOMETRIC cartesian states
Output format   : 3 (position, velocity, LT, range, range-rate)
*******************************************************************************
$$SOE
2460310.500000000 = A.D. 2024-Jan-01 00:00:00.0000 TDB
 X = 1.000000000000000E+08 Y = 0.000000000000000E+00 Z = 0.000000000000000E+00
 VX= 0.000000000000000E+00 VY= 2.400000000000000E+01 VZ= 0.000000000000000E+00
 LT= 3.335640951981520E+02 RG= 1.000000000000000E+08 RR= 0.000000000000000E+00
2460310.541666667 = A.D. 2024-Jan-01 01:00:00.0000 TDB
 X = 0.000000000000000E+00 Y = 1.000000000000000E+08 Z = 0.000000000000000E+00
 VX=-2.400000000000000E+01 VY= 0.000000000000000E+00 VZ= 0.000000000000000E+00
 LT= 3.335640951981520E+02 RG= 1.000000000000000E+08 RR= 0.000000000000000E+00
2460310.583333333 = A.D. 2024-Jan-01 02:00:00.0000 TDB
 X = 0.000000000000000E+00 Y = 0.000000000000000E+00 Z =-2.000000000000000E+08
 VX= 0.000000000000000E+00 VY= 0.000000000000000E+00 VZ= 1.000000000000000E+00
 LT= 6.671281903963040E+02 RG= 2.000000000000000E+08 RR= 0.000000000000000E+00
$$EOE
*******************************************************************************
"""

# Topocentric observer table with both site lines; RA 06h, DEC +30d, range 0.5 AU.
TOPOCENTRIC_REPORT = """\
*******************************************************************************
Target body name: Moon (301)                      {source: DE441}
Center body name: Earth (399)                     {source: DE441}
Center-site name: Test Observatory
*******************************************************************************
Center geodetic : 90.0000000,30.0000000,0.0000000 {E-lon(deg),Lat(deg),Alt(km)}
Center cylindric: 90.0000000,5500.00000,3200.0000 {E-lon(deg),Dxy(km),Dz(km)}
Center radii    : 6378.137, 6378.137, 6356.752 km {Equator, meridian, pole}
*******************************************************************************
 Date__(UT)__HR:MN     R.A._____(ICRF)_____DEC  APmag   S-brt            delta      deldot
*******************************************************************************
$$SOE
 2024-Mar-20 00:00     06 00 00.00 +30 00 00.0  -12.50   3.900  0.50000000000000  0.1000000
 2024-Mar-20 06:00     06 00 00.00 +30 00 00.0  -12.50   3.900  0.50000000000000  0.1000000
$$EOE
"""


@pytest.fixture
def write_report(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper writing report text to a file under tmp_path."""

    def _write(text: str, name: str = 'horizons_results.txt') -> Path:
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return path

    return _write


@pytest.fixture
def angular_report() -> str:
    return ANGULAR_REPORT


@pytest.fixture
def state_vector_report() -> str:
    return STATE_VECTOR_REPORT


@pytest.fixture
def topocentric_report() -> str:
    return TOPOCENTRIC_REPORT
