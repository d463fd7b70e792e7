"""Route description grammar consumed by the document builder.

Routes are described with immutable rule trees:

* :mod:`~routedoc.routing.path` -- literal segments, captures, tails.
* :mod:`~routedoc.routing.query` -- query-string captures.
* :mod:`~routedoc.routing.headers` -- header captures and requirements.
* :mod:`~routedoc.routing.meta` -- metadata wrappers (summaries, descriptions).
* :mod:`~routedoc.routing.action` -- :class:`RouteAction` and result types.

Typical usage::

    from routedoc.routing import GET, RouteAction, TypeOnly, param, path_var, root

    action = RouteAction(
        GET,
        (root() / "users" / path_var("id", int)).describe("Fetch a user"),
        query=param("expand", bool, default=False),
        result_info=(TypeOnly(User),),
    )
"""

from routedoc.routing.action import (
    EmptyResult,
    ResultInfo,
    RouteAction,
    StatusAndType,
    StatusOnly,
    TypeOnly,
)
from routedoc.routing.headers import (
    EmptyHeaderRule,
    HeaderAnd,
    HeaderCapture,
    HeaderMapper,
    HeaderMeta,
    HeaderOr,
    HeaderRequire,
    HeaderRule,
    header,
)
from routedoc.routing.meta import MetaCons, Metadata, RouteDesc, TextMetaData
from routedoc.routing.path import (
    CaptureTail,
    PathAnd,
    PathCapture,
    PathMatch,
    PathMeta,
    PathOperation,
    PathOr,
    PathRule,
    as_path_rule,
    path_var,
    root,
    tail,
)
from routedoc.routing.query import (
    EmptyQuery,
    QueryAnd,
    QueryCapture,
    QueryMeta,
    QueryOr,
    QueryRule,
    param,
)

GET = "GET"
PUT = "PUT"
POST = "POST"
DELETE = "DELETE"
PATCH = "PATCH"
OPTIONS = "OPTIONS"

__all__ = [
    "CaptureTail",
    "DELETE",
    "EmptyHeaderRule",
    "EmptyQuery",
    "EmptyResult",
    "GET",
    "HeaderAnd",
    "HeaderCapture",
    "HeaderMapper",
    "HeaderMeta",
    "HeaderOr",
    "HeaderRequire",
    "HeaderRule",
    "MetaCons",
    "Metadata",
    "OPTIONS",
    "PATCH",
    "POST",
    "PUT",
    "PathAnd",
    "PathCapture",
    "PathMatch",
    "PathMeta",
    "PathOperation",
    "PathOr",
    "PathRule",
    "QueryAnd",
    "QueryCapture",
    "QueryMeta",
    "QueryOr",
    "QueryRule",
    "ResultInfo",
    "RouteAction",
    "RouteDesc",
    "StatusAndType",
    "StatusOnly",
    "TextMetaData",
    "TypeOnly",
    "as_path_rule",
    "header",
    "param",
    "path_var",
    "root",
    "tail",
]
