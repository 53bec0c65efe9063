"""Configuration parameters for the ride analytics engine.

This module centralizes all tunable constants including:
- Statistical defaults (histogram bins, curve resolution, outlier fences)
- Leaderboard sizes
- Ledger parsing rules (sentinels, field aliases)
- Chart colours

Values here are defaults only; the CLI exposes per-run overrides for the
ones that callers commonly change.
"""

from typing import Dict, Tuple

# ============================================================================
# Statistical Defaults
# ============================================================================

DEFAULT_NUM_BINS = 20
"""Number of equal-width buckets used for distance histograms."""

DEFAULT_CURVE_POINTS = 100
"""Number of intervals sampled along the distribution curve.

The curve emits DEFAULT_CURVE_POINTS + 1 points (both range ends included).
"""

MILD_OUTLIER_FENCE = 1.5
"""IQR multiplier for the mild outlier fences (Tukey's inner fence)."""

EXTREME_OUTLIER_FENCE = 3.0
"""IQR multiplier for the extreme outlier fences (Tukey's outer fence)."""

CURVE_STD_SPAN = 3.0
"""Standard deviations either side of the mean kept in the curve range."""


# ============================================================================
# Leaderboards
# ============================================================================

DEFAULT_TOP_N = 10
"""Default number of entries kept in date, client and price leaderboards."""

ECO_PICKUP_THRESHOLD_KM = 0.5
"""Pickups closer than this to the ECO base count as pickups from the base (km)."""

WEEKDAY_ORDER = (
    "Lunes",
    "Martes",
    "Miércoles",
    "Jueves",
    "Viernes",
    "Sábado",
    "Domingo",
)
"""Calendar order for the weekday distribution, as written in the ledger."""


# ============================================================================
# Ledger Parsing
# ============================================================================

ERROR_SENTINEL = "ERROR"
"""Literal the ledger writes into a cell when a formula fails."""

MISSING_LABEL = "N/A"
"""Label used for absent client, transport and weekday values."""

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "ride_id": ("ID", "Id", "id", "ride_id"),
    "client": ("Cliente", "cliente", "client"),
    "registered_date": ("Fecha Registro", "fecha_registro", "registered_date"),
    "registered_time": ("Hora Registro", "hora_registro", "registered_time"),
    "scheduled_date": (
        "Fechas",
        "Fecha Agendada",
        "fecha",
        "fecha_agendada",
        "scheduled_date",
    ),
    "pickup_distance": (
        "Dist. Eco Recojo [Km]",
        "Distancia Eco Recojo",
        "distancia_recojo",
        "pickup_distance",
    ),
    "delivery_distance": (
        "Dist. Eco Entrega [Km]",
        "Distancia Eco Entrega",
        "distancia_entrega",
        "delivery_distance",
    ),
    "total_distance": ("Dist. [Km]", "Distancia [Km]", "distancia_km", "total_distance"),
    "transport": ("Medio Transporte", "medio_transporte", "transport"),
    "price": ("Precio [Bs]", "Precio", "precio_bs", "precio", "price"),
    "weekday": ("Dia de la semana", "Día de la semana", "dia_semana", "weekday"),
}
"""Canonical field name -> accepted ledger labels, in lookup priority order.

Bracketed sheet headers come first, then accented or plain variants, then
the snake_case keys used by the order forms and the API.
"""


# ============================================================================
# Chart Colours
# ============================================================================

BRAND_ORANGE = "#f74823"
BRAND_BLUE = "#2374f7"
BRAND_CREAM = "#fffdee"
BRAND_TAUPE = "#686a5f"
