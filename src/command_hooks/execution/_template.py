from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from ..models.execution import TemplateContext

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def interpolate_template(template: str | None, context: TemplateContext | Mapping[str, Any]) -> str:
    """Replace `{name}` placeholders with values from `context`.

    Substitution is a single pass: text coming from a value is never scanned
    for further placeholders. Missing or None values render as an empty string.
    """
    if not template:
        return ""
    values = context.as_mapping() if isinstance(context, TemplateContext) else context

    def replace(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        return "" if value is None else str(value)

    result = _PLACEHOLDER.sub(replace, template)
    logger.debug("Interpolated template (%d chars -> %d chars)", len(template), len(result))
    return result
