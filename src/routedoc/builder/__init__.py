"""Document builder -- compile route actions into a Swagger document.

Sub-modules, leaves first:

* :mod:`~routedoc.builder.schemas` -- expand Python types into schema models.
* :mod:`~routedoc.builder.linearize` -- flatten path rule trees into
  sequences, path templates and summaries.
* :mod:`~routedoc.builder.params` -- path, query, header and body parameters.
* :mod:`~routedoc.builder.naming` -- tags and operation ids.
* :mod:`~routedoc.builder.document` -- operations and the document fold.

Typical usage::

    from routedoc.builder import build_document

    doc = build_document(actions, info=Info(title="Pets", version="1.0"))
    print(json.dumps(doc.to_dict(), indent=2))
"""

from routedoc.builder.document import (
    ActionContribution,
    action_contribution,
    apply_contribution,
    build_document,
    find_schema_collisions,
    fold_contributions,
    make_operation,
    merge_action,
)
from routedoc.builder.linearize import collect_summary, linearize_stack, make_path_strings
from routedoc.builder.naming import make_operation_id
from routedoc.builder.schemas import DEFAULT_FORMATS, SwaggerFormats, collect_models

__all__ = [
    "ActionContribution",
    "DEFAULT_FORMATS",
    "SwaggerFormats",
    "action_contribution",
    "apply_contribution",
    "build_document",
    "collect_models",
    "collect_summary",
    "find_schema_collisions",
    "fold_contributions",
    "linearize_stack",
    "make_operation",
    "make_operation_id",
    "make_path_strings",
    "merge_action",
]
