"""
sRGB to CIE Lab conversion and the CIEDE2000 color difference.

Lab values use the D65 reference white with XYZ scaled to 0-100. Delta-E
follows Sharma, Wu and Dalal (2005) with unit parametric weights; as a rough
guide, below 1 is imperceptible, 2-10 is noticeable at a glance and 100 is
the difference between opposite colors.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from drawing_coach.data_models import Rgb

from .geometry import round_half_up

# D65 reference white.
REF_X = 95.047
REF_Y = 100.0
REF_Z = 108.883

LAB_EPSILON = 0.008856
LAB_KAPPA = 903.3

_POW25_7 = 25.0 ** 7


@dataclass(frozen=True)
class Lab:
    l: float  # noqa: E741
    a: float
    b: float


def srgb_to_linear(channel: int | float) -> float:
    """Gamma-decode one 0-255 sRGB channel to linear 0-1."""
    c = channel / 255
    if c > 0.04045:
        return ((c + 0.055) / 1.055) ** 2.4
    return c / 12.92


def rgb_to_xyz(rgb: Rgb) -> Tuple[float, float, float]:
    r = srgb_to_linear(rgb.r) * 100
    g = srgb_to_linear(rgb.g) * 100
    b = srgb_to_linear(rgb.b) * 100
    return (
        r * 0.4124564 + g * 0.3575761 + b * 0.1804375,
        r * 0.2126729 + g * 0.7151522 + b * 0.0721750,
        r * 0.0193339 + g * 0.1191920 + b * 0.9503041,
    )


def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return t ** (1 / 3)
    return (LAB_KAPPA * t + 16) / 116


def xyz_to_lab(xyz: Tuple[float, float, float]) -> Lab:
    fx = _lab_f(xyz[0] / REF_X)
    fy = _lab_f(xyz[1] / REF_Y)
    fz = _lab_f(xyz[2] / REF_Z)
    return Lab(l=116 * fy - 16, a=500 * (fx - fy), b=200 * (fy - fz))


def rgb_to_lab(rgb: Rgb) -> Lab:
    return xyz_to_lab(rgb_to_xyz(rgb))


def _hue_degrees(b: float, a_prime: float) -> float:
    hue = math.degrees(math.atan2(b, a_prime))
    return hue + 360 if hue < 0 else hue


def delta_e_2000(lab1: Lab, lab2: Lab) -> float:
    k_l = k_c = k_h = 1.0

    c1 = math.sqrt(lab1.a * lab1.a + lab1.b * lab1.b)
    c2 = math.sqrt(lab2.a * lab2.a + lab2.b * lab2.b)
    c_bar = (c1 + c2) / 2
    c_bar7 = c_bar ** 7
    g = 0.5 * (1 - math.sqrt(c_bar7 / (c_bar7 + _POW25_7)))

    a1_prime = lab1.a * (1 + g)
    a2_prime = lab2.a * (1 + g)
    c1_prime = math.sqrt(a1_prime * a1_prime + lab1.b * lab1.b)
    c2_prime = math.sqrt(a2_prime * a2_prime + lab2.b * lab2.b)
    h1_prime = _hue_degrees(lab1.b, a1_prime)
    h2_prime = _hue_degrees(lab2.b, a2_prime)

    delta_l_prime = lab2.l - lab1.l
    delta_c_prime = c2_prime - c1_prime

    chroma_product = c1_prime * c2_prime
    hue_diff = h2_prime - h1_prime
    if chroma_product == 0:
        delta_h_small = 0.0
    elif abs(hue_diff) <= 180:
        delta_h_small = hue_diff
    elif hue_diff > 180:
        delta_h_small = hue_diff - 360
    else:
        delta_h_small = hue_diff + 360
    delta_h_prime = 2 * math.sqrt(chroma_product) * math.sin(math.radians(delta_h_small / 2))

    l_bar_prime = (lab1.l + lab2.l) / 2
    c_bar_prime = (c1_prime + c2_prime) / 2

    hue_sum = h1_prime + h2_prime
    if chroma_product == 0:
        h_bar_prime = hue_sum
    elif abs(h1_prime - h2_prime) <= 180:
        h_bar_prime = hue_sum / 2
    elif hue_sum < 360:
        h_bar_prime = (hue_sum + 360) / 2
    else:
        h_bar_prime = (hue_sum - 360) / 2

    t = (
        1
        - 0.17 * math.cos(math.radians(h_bar_prime - 30))
        + 0.24 * math.cos(math.radians(2 * h_bar_prime))
        + 0.32 * math.cos(math.radians(3 * h_bar_prime + 6))
        - 0.20 * math.cos(math.radians(4 * h_bar_prime - 63))
    )

    l_offset = (l_bar_prime - 50) ** 2
    s_l = 1 + (0.015 * l_offset) / math.sqrt(20 + l_offset)
    s_c = 1 + 0.045 * c_bar_prime
    s_h = 1 + 0.015 * c_bar_prime * t

    delta_theta = 30 * math.exp(-(((h_bar_prime - 275) / 25) ** 2))
    c_bar_prime7 = c_bar_prime ** 7
    r_c = 2 * math.sqrt(c_bar_prime7 / (c_bar_prime7 + _POW25_7))
    r_t = -r_c * math.sin(math.radians(2 * delta_theta))

    term_l = delta_l_prime / (k_l * s_l)
    term_c = delta_c_prime / (k_c * s_c)
    term_h = delta_h_prime / (k_h * s_h)
    return math.sqrt(term_l ** 2 + term_c ** 2 + term_h ** 2 + r_t * term_c * term_h)


def color_difference(color1: Rgb, color2: Rgb) -> float:
    """CIEDE2000 difference between two sRGB colors."""
    return delta_e_2000(rgb_to_lab(color1), rgb_to_lab(color2))


def delta_e_to_score(delta_e: float, tolerance: float) -> int:
    """100 for identical colors, 0 at or beyond `tolerance`, linear between."""
    if delta_e <= 0:
        return 100
    if delta_e >= tolerance:
        return 0
    return round_half_up(100 * (1 - delta_e / tolerance))
