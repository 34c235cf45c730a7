"""Flask CLI commands."""

from __future__ import annotations

import json

import click
from flask.cli import with_appcontext

from sabor_rota.extensions import db


@click.command('init-db')
@with_appcontext
def init_db_command() -> None:
    """Создаёт таблицы в базе данных (без alembic)."""
    from sabor_rota import models  # noqa: F401

    db.create_all()
    click.echo('Database tables created.')


@click.command('search-restaurants')
@click.option('--latitude', type=float, required=True)
@click.option('--longitude', type=float, required=True)
@with_appcontext
def search_restaurants_command(latitude: float, longitude: float) -> None:
    """Ищет рестораны рядом с точкой и печатает результат в JSON."""
    from sabor_rota.services.geocode_service import GeocodingError
    from sabor_rota.services.places_service import PlacesError
    from sabor_rota.services.restaurants_service import AddressNotFoundError, search_restaurants

    try:
        restaurants = search_restaurants(latitude, longitude)
    except (AddressNotFoundError, GeocodingError, PlacesError) as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(json.dumps([r.to_dict() for r in restaurants], ensure_ascii=False, indent=2))


def register_commands(app) -> None:
    app.cli.add_command(init_db_command)
    app.cli.add_command(search_restaurants_command)
