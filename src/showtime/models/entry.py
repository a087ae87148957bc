"""Generic catalog entry representation before typing."""

from typing import Any

# Flat mapping of canonical field name -> raw feed value (str or number).
GenericEntry = dict[str, Any]
