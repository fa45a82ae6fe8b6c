"""Shared CLI plumbing: JSON output and error rendering."""

from __future__ import annotations

import json
from typing import IO, Any

import click

from storefront.domain.exceptions import DomainException, ValidationError
from storefront.domain.model.payment import GatewayKind
from storefront.infrastructure.responses import error_response, success

GATEWAY_CHOICE = click.Choice([kind.value for kind in GatewayKind], case_sensitive=False)


class CommandError(click.ClickException):
    """A domain error rendered as the ``{"success": false}`` body.

    ``status`` is the HTTP-equivalent status for the error kind.
    """

    def __init__(self, status: int, body: dict[str, Any]) -> None:
        super().__init__(body["message"])
        self.status = status
        self.body = body

    @staticmethod
    def from_exception(exc: DomainException) -> CommandError:
        status, body = error_response(exc)
        return CommandError(status, body)

    def show(self, file: IO[Any] | None = None) -> None:
        click.echo(json.dumps({**self.body, "status": self.status}), err=True)


def emit(**payload: Any) -> None:
    click.echo(json.dumps(success(**payload), indent=2))


def read_json(stream: IO[str], label: str) -> dict[str, Any]:
    """Read a JSON object from an opened ``click.File``."""
    try:
        data = json.load(stream)
    except ValueError as exc:
        raise CommandError.from_exception(
            ValidationError(f"{label} is not valid JSON: {exc}")
        ) from exc
    if not isinstance(data, dict):
        raise CommandError.from_exception(
            ValidationError(f"{label} must be a JSON object")
        )
    return data
