"""CLI for browsing a prismic.io repository."""

import json
from typing import Annotated

import typer
from loguru import logger

from prismic_kit.api import Api
from prismic_kit.config import resolve_access_token
from prismic_kit.errors import PrismicError
from prismic_kit.logging_config import configure_logging
from prismic_kit.models.document import Document

app = typer.Typer(help="prismic-kit: query a prismic.io content repository.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _connect(url: str, token: str | None) -> Api:
    """Fetch the descriptor, exiting with status 1 on failure."""
    try:
        return Api.connect(url, access_token=token or resolve_access_token())
    except PrismicError as e:
        logger.error("Cannot load API at {}: {}", url, e)
        raise typer.Exit(1) from e


TokenOption = Annotated[
    str | None,
    typer.Option("--token", "-t", help="Access token (default: $PRISMIC_ACCESS_TOKEN)"),
]


@app.command()
def refs(
    url: str = typer.Argument(..., help="API endpoint, e.g. https://repo.prismic.io/api"),
    token: TokenOption = None,
) -> None:
    """List the refs of the repository."""
    api = _connect(url, token)
    for r in api.refs:
        marker = "*" if r.is_master else " "
        typer.echo(f"{marker} {r.label}  [ref={r.ref}]")


@app.command()
def forms(
    url: str = typer.Argument(..., help="API endpoint"),
    token: TokenOption = None,
) -> None:
    """List the forms and their fields."""
    api = _connect(url, token)
    for form_id, form in sorted(api.forms.items()):
        typer.echo(f"{form_id} ({form.name or '-'})")
        for name, spec in form.fields.items():
            flags = " multiple" if spec.multiple else ""
            typer.echo(f"    {name}: {spec.type}{flags}")


def _document_summary(doc: Document) -> dict[str, object]:
    return {"id": doc.id, "type": doc.type, "slug": doc.slug, "tags": list(doc.tags)}


@app.command()
def search(
    url: str = typer.Argument(..., help="API endpoint"),
    form_id: str = typer.Option("everything", "--form", "-f", help="Form to submit"),
    ref_label: Annotated[
        str | None,
        typer.Option("--ref", "-r", help="Ref label (default: master)"),
    ] = None,
    query: Annotated[
        str | None,
        typer.Option("--query", "-q", help="Raw query string"),
    ] = None,
    predicate: Annotated[
        list[str] | None,
        typer.Option("--predicate", "-p", help="OPERATOR:PATH:VALUE, e.g. at:document.type:blog"),
    ] = None,
    page: int = typer.Option(1, "--page", help="Page number"),
    page_size: int = typer.Option(20, "--page-size", "-n", help="Results per page"),
    token: TokenOption = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Submit a search form and print the matching documents."""
    api = _connect(url, token)

    search_form = api.form(form_id)
    if search_form is None:
        typer.echo(f"Form '{form_id}' not found.")
        raise typer.Exit(1)

    ref = api.master()
    if ref_label:
        ref = api.ref(ref_label)
        if ref is None:
            typer.echo(f"Ref '{ref_label}' not found.")
            raise typer.Exit(1)

    try:
        search_form.ref(ref).page(page).page_size(page_size)
        if query:
            search_form.query(query)
        elif predicate:
            search_form.query(*[_parse_predicate(p) for p in predicate])
        response = search_form.submit()
    except (PrismicError, ValueError) as e:
        logger.error("Search failed: {}", e)
        raise typer.Exit(1) from e

    if output_json:
        data = {
            "page": response.page,
            "total_pages": response.total_pages,
            "total_results_size": response.total_results_size,
            "results": [_document_summary(d) for d in response.results],
        }
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(
            f"Page {response.page}/{response.total_pages}, "
            f"{response.total_results_size} results:\n"
        )
        for doc in response.results:
            typer.echo(f"  [{doc.type}] {doc.slug}  id={doc.id}")


def _parse_predicate(text: str) -> tuple[str, ...]:
    parts = text.split(":", 2)
    if len(parts) != 3:
        msg = f"Bad predicate {text!r}, expected OPERATOR:PATH:VALUE"
        raise ValueError(msg)
    return tuple(parts)
