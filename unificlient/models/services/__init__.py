from unificlient.models.services.parameter_mapping import (
    fill_manufacturer_and_model,
    get_family_types,
)
from unificlient.models.services.search import resolve_single_result

__all__ = [
    "fill_manufacturer_and_model",
    "get_family_types",
    "resolve_single_result",
]
