"""Derives the fields UNIFI does not return directly from a content's parameters."""

from typing import TYPE_CHECKING, Iterable, List

from unificlient.core.utils import unique_ordered

if TYPE_CHECKING:
    from unificlient.models import Content, Parameter

MANUFACTURER_PARAMETER = "Manufacturer"
MODEL_PARAMETER = "Model"


def fill_manufacturer_and_model(content: "Content") -> "Content":
    """
    Copy the values of the `Manufacturer` and `Model` parameters onto the content.
    When a parameter occurs more than once, once per family type for instance, the
    last one wins. Fields without a matching parameter are left untouched.

    Arguments:
        content: The content to fill in place.

    Returns:
        The same content.
    """
    for parameter in content.parameters or []:
        if parameter.name == MANUFACTURER_PARAMETER:
            content.manufacturer = parameter.value
        elif parameter.name == MODEL_PARAMETER:
            content.model = parameter.value
    return content


def get_family_types(parameters: Iterable["Parameter"]) -> List[str]:
    """
    Get the Revit family type names present in a list of parameters.

    Arguments:
        parameters: The parameters of a piece of content.

    Returns:
        Each non-empty type name once, in the order first seen.
    """
    return unique_ordered(
        parameter.type_name for parameter in parameters or [] if parameter.type_name
    )
