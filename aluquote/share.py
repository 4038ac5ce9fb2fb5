"""
Share links — an estimate input packed into short query parameters.

Keys: w (width mm), h (height mm), gt (glass type), t (thickness mm),
p (profile), f (finish), c (cost per kg), a (accessories kg).
Margin and discount are not part of a shared link.
"""

from urllib.parse import parse_qsl, urlencode

from .schemas import EstimateInput

SHARE_KEYS = {
    "w": "width_mm",
    "h": "height_mm",
    "gt": "glass_type",
    "t": "glass_thickness_mm",
    "p": "profile",
    "f": "finish",
    "c": "cost_per_kg",
    "a": "accessories_kg",
}


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(value)


def encode_share_params(estimate_input: EstimateInput) -> str:
    params = {}
    for key, field in SHARE_KEYS.items():
        value = getattr(estimate_input, field)
        if isinstance(value, float):
            params[key] = _format_number(value)
        else:
            params[key] = value.value
    return urlencode(params)


def decode_share_params(params) -> EstimateInput:
    """
    Rebuild an EstimateInput from a query string or a mapping.

    Missing keys keep their defaults; unknown glass/profile/finish values
    raise a ValidationError.
    """
    if isinstance(params, str):
        params = dict(parse_qsl(params.lstrip("?"), keep_blank_values=True))
    values = {
        field: params[key]
        for key, field in SHARE_KEYS.items()
        if key in params
    }
    return EstimateInput(**values)


def build_share_url(base_url: str, estimate_input: EstimateInput) -> str:
    base = base_url.split("?", 1)[0]
    return f"{base}?{encode_share_params(estimate_input)}"
