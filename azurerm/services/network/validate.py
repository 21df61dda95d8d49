"""
Validators shared by the network resources.
"""

import re
from typing import Any, Dict, List

from azurerm.core.exceptions import ValidationError

IPV4 = "IPv4"

_PRIVATE_LINK_NAME = re.compile(r"^([a-zA-Z\d])($|([a-zA-Z\d_\-.]{0,78})?([a-zA-Z\d_])$)")


def validate_private_link_name(value: Any, key: str):
    """
    Private link names are 1-80 characters, start with a letter or digit,
    end with a letter, digit or underscore, and may contain periods and hyphens.
    """
    if not isinstance(value, str):
        return [], [f"expected type of {key} to be string"]
    if not _PRIVATE_LINK_NAME.match(value):
        return [], [
            f"{key} must be between 1 and 80 characters in length, begin with a letter or number, "
            f"end with a letter, number or underscore, and may contain only letters, numbers, "
            f"underscores, periods, or hyphens: {value!r}"
        ]
    return [], []


def nat_ip_configuration_errors(configs: List[Dict[str, Any]]) -> List[str]:
    """
    Check the primary flag and IP version of each NAT IP configuration.

    The first configuration must be the primary one, no other may be
    primary, and the primary configuration must use IPv4.
    """
    errors = []
    for i, item in enumerate(configs or []):
        name = item.get("name") or ""
        primary = bool(item.get("primary"))
        version = item.get("private_ip_address_version") or IPV4

        if i == 0 and not primary:
            errors.append(
                f'"nat_ip_configuration.0.primary": the first "nat_ip_configuration" ({name!r}) must be the primary IP configuration'
            )
        if i != 0 and primary:
            errors.append(
                f'"nat_ip_configuration.{i}.primary": only the first "nat_ip_configuration" can be primary, {name!r} cannot be'
            )
        if primary and version != IPV4:
            errors.append(
                f'"nat_ip_configuration.{i}.private_ip_address_version": the primary IP configuration ({name!r}) must be {IPV4}, got {version!r}'
            )
    return errors


def validate_private_link_nat_ip_configuration(d, meta) -> None:
    """
    CustomizeDiff hook for azurerm_private_link_service.

    Raises:
        ValidationError: If the NAT IP configurations are inconsistent
    """
    errors = nat_ip_configuration_errors(d.get("nat_ip_configuration"))
    if errors:
        raise ValidationError(d.resource.type_name, errors)
