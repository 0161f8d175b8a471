"""Cart arithmetic shared by the API and its clients.

Lines are plain dicts with ``product_id``, ``price`` and ``quantity`` keys and
an optional ``max_stock``. Every function returns new lists and leaves its
inputs untouched.
"""
from typing import Dict, List, Optional, Tuple

Line = Dict[str, object]


def line_total(line: Line) -> float:
    return float(line["price"]) * int(line["quantity"])


def calculate_totals(lines: List[Line]) -> Tuple[int, float]:
    total_items = sum(int(line["quantity"]) for line in lines)
    total_amount = round(sum(line_total(line) for line in lines), 2)
    return total_items, total_amount


def _cap(quantity: int, max_stock: Optional[int]) -> int:
    if max_stock is None:
        return quantity
    return min(quantity, max_stock)


def add_item(lines: List[Line], line: Line) -> List[Line]:
    """Add ``line`` or merge it into the line for the same product.

    The merged quantity is capped at the line's ``max_stock`` when known.
    """
    result = []
    merged = False
    for existing in lines:
        if existing["product_id"] == line["product_id"]:
            max_stock = existing.get("max_stock", line.get("max_stock"))
            quantity = _cap(int(existing["quantity"]) + int(line["quantity"]), max_stock)
            result.append({**existing, "quantity": quantity})
            merged = True
        else:
            result.append(dict(existing))
    if not merged:
        result.append({**line, "quantity": _cap(int(line["quantity"]), line.get("max_stock"))})
    return result


def remove_item(lines: List[Line], product_id) -> List[Line]:
    return [dict(line) for line in lines if line["product_id"] != product_id]


def update_quantity(lines: List[Line], product_id, quantity: int) -> List[Line]:
    # Out of range quantities leave the cart as it was
    result = []
    for line in lines:
        line = dict(line)
        if line["product_id"] == product_id:
            max_stock = line.get("max_stock")
            if quantity > 0 and (max_stock is None or quantity <= max_stock):
                line["quantity"] = quantity
        result.append(line)
    return result


def increase_quantity(lines: List[Line], product_id) -> List[Line]:
    for line in lines:
        if line["product_id"] == product_id:
            return update_quantity(lines, product_id, int(line["quantity"]) + 1)
    return [dict(line) for line in lines]


def decrease_quantity(lines: List[Line], product_id) -> List[Line]:
    for line in lines:
        if line["product_id"] == product_id:
            return update_quantity(lines, product_id, int(line["quantity"]) - 1)
    return [dict(line) for line in lines]
