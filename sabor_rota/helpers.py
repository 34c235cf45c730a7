"""
Вспомогательные функции для обработки запросов.

Разбор query-параметров через pydantic-контракты и постраничная
выдача используются несколькими blueprint'ами и вынесены сюда.
"""

from typing import Any, Dict, Iterable, Tuple, Type

from flask import current_app, jsonify, request
from pydantic import BaseModel, ValidationError


def query_args(names: Iterable[str]) -> Dict[str, Any]:
    """Взять из query string только перечисленные параметры.

    Пустые значения отбрасываются, чтобы сработали значения по
    умолчанию в схеме.
    """
    out: Dict[str, Any] = {}
    for name in names:
        value = request.args.get(name)
        if value is None or value.strip() == "":
            continue
        out[name] = value
    return out


def validate_args(schema: Type[BaseModel]) -> Tuple[BaseModel | None, Any]:
    """Провалидировать query string по схеме.

    Возвращает ``(model, None)`` либо ``(None, response)`` с ответом 400.
    """
    raw = query_args(schema.model_fields.keys())
    try:
        return schema.model_validate(raw), None
    except ValidationError as e:
        details = e.errors(include_url=False, include_context=False, include_input=False)
        return None, (jsonify(error='Validation failed', details=details), 400)


def paginate(query, page: int | None, per_page: int | None):
    """Ответ в формате {items, page, per_page, total} либо простой список."""
    if page is None and per_page is None:
        return jsonify([item.to_dict() for item in query.all()])

    page = page or 1
    max_per_page = int(current_app.config.get('RESTAURANTS_MAX_PER_PAGE', 500))
    # Не даём сильно раздувать страницу
    per_page = min(per_page or 100, max_per_page)

    total = query.count()
    items = [item.to_dict() for item in query.offset((page - 1) * per_page).limit(per_page).all()]
    return jsonify(
        {
            "items": items,
            "page": page,
            "per_page": per_page,
            "total": total,
        }
    )
