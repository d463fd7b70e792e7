"""routedoc -- compile combinator-built route descriptions into Swagger documents.

Routes are described with immutable rule trees (:mod:`routedoc.routing`)
and compiled by :mod:`routedoc.builder` into a Swagger 2.0 document
(:class:`~routedoc.models.Swagger`).  Documents are values: each route
action is folded into the previous document to produce a new one, so
documentation for separately registered routes can be built up
incrementally.

Typical usage::

    from routedoc.builder import build_document
    from routedoc.models import Info
    from routedoc.routing import GET, RouteAction, TypeOnly, path_var, root

    actions = [
        RouteAction(GET, root() / "users" / path_var("id", int), result_info=(TypeOnly(User),)),
    ]
    doc = build_document(actions, info=Info(title="Users", version="1.0"))
    doc.to_dict()["paths"]["/users/{id}"]["get"]["operationId"]  # 'getUsers'

Modules:
    app: Typer application and CLI entry point.
    builder: Route action to document compiler.
    config: Precedence-based configuration resolution.
    models: Pydantic configuration and document models.
    reflection: Runtime type reflection used for schema generation.
    routing: Route description grammar.
"""

__version__ = "0.1.0"
