"""Route actions and model types shared by the test suite.

Imported both directly by tests and through ``sample_api:ROUTES`` style
targets by the CLI tests.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from http import HTTPStatus
from typing import Optional

from pydantic import BaseModel

from routedoc.routing import (
    DELETE,
    GET,
    POST,
    RouteAction,
    StatusAndType,
    StatusOnly,
    TypeOnly,
    header,
    param,
    path_var,
    root,
)


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


class Priority(enum.IntEnum):
    LOW = 1
    HIGH = 2


@dataclass
class Address:
    street: str
    city: str
    zip_code: Optional[str] = None


@dataclass
class User:
    """A registered user.

    Users own posts.
    """

    id: int
    name: str
    address: Address
    tags: list[str]
    nickname: Optional[str] = None


@dataclass
class TreeNode:
    value: int
    children: list[TreeNode]
    parent: Optional[TreeNode] = None


@dataclass
class Employee:
    name: str
    manager: Optional[Manager] = None


@dataclass
class Manager:
    name: str
    reports: list[Employee]


class Post(BaseModel):
    id: int
    title: str
    author: User
    color: Color = Color.RED


class Category(BaseModel):
    name: str
    children: list[Category] = []


class Legacy:
    """Namespace holding a second type named ``User``."""

    @dataclass
    class User:
        login: str


USERS = root() / "users"
USER = USERS / path_var("id", int)

ROUTES = [
    RouteAction(
        GET,
        USERS.describe("List users"),
        query=param("limit", int, default=10) & param("offset", int, default=0),
        result_info=(TypeOnly(list[User]),),
    ),
    RouteAction(
        POST,
        USERS,
        body_type=User,
        result_info=(StatusAndType(HTTPStatus.CREATED, User),),
        valid_media=("application/json",),
        response_encodings=("application/json",),
    ),
    RouteAction(
        GET,
        USER.describe("Fetch a user"),
        result_info=(TypeOnly(User), StatusOnly(HTTPStatus.NOT_FOUND)),
    ),
    RouteAction(
        DELETE,
        USER,
        result_info=(StatusOnly(HTTPStatus.NO_CONTENT),),
    ),
    RouteAction(
        GET,
        USER / "posts",
        headers=header("X-Request-Id"),
        result_info=(TypeOnly(list[Post]),),
    ),
]

ADMIN_ROUTES = [
    RouteAction(GET, root() / "admin" / "tree", result_info=(TypeOnly(TreeNode),)),
]

BAD_ROUTES = [
    RouteAction("HEAD", USERS),
]

COLLIDING_ROUTES = [
    RouteAction(GET, root() / "users", result_info=(TypeOnly(User),)),
    RouteAction(GET, root() / "legacy", result_info=(TypeOnly(Legacy.User),)),
]


def make_routes() -> list[RouteAction]:
    return list(ADMIN_ROUTES)


NOT_ROUTES = ["not", "routes"]
