import re
from typing import Mapping

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def interpolate_variables(template: str, variables: Mapping[str, str]) -> str:
    """
    Replace {{ name }} placeholders with values from `variables`.

    Unknown names are left as written.
    """
    def _sub(m: "re.Match[str]") -> str:
        key = m.group(1)
        if key in variables:
            return str(variables[key])
        return m.group(0)

    return _PLACEHOLDER.sub(_sub, template)
