from utils import cart_math


def _line(product_id, price, quantity, max_stock=None):
    line = {"product_id": product_id, "price": price, "quantity": quantity}
    if max_stock is not None:
        line["max_stock"] = max_stock
    return line


def test_calculate_totals():
    lines = [_line(1, 120, 2), _line(2, 19.99, 3)]

    assert cart_math.calculate_totals(lines) == (5, 299.97)
    assert cart_math.calculate_totals([]) == (0, 0)


def test_add_item_merges_and_caps_at_stock():
    lines = [_line(1, 120, 2, max_stock=3)]

    merged = cart_math.add_item(lines, _line(1, 120, 5))

    assert merged == [_line(1, 120, 3, max_stock=3)]
    # Input is left alone
    assert lines[0]["quantity"] == 2


def test_add_item_appends_new_product_capped():
    lines = cart_math.add_item([_line(1, 120, 1)], _line(2, 80, 20, max_stock=15))

    assert [(l["product_id"], l["quantity"]) for l in lines] == [(1, 1), (2, 15)]


def test_add_item_without_stock_info_is_uncapped():
    lines = cart_math.add_item([_line(1, 10, 4)], _line(1, 10, 4))

    assert lines[0]["quantity"] == 8


def test_update_quantity_ignores_out_of_range():
    lines = [_line(1, 10, 2, max_stock=5)]

    assert cart_math.update_quantity(lines, 1, 4)[0]["quantity"] == 4
    assert cart_math.update_quantity(lines, 1, 0)[0]["quantity"] == 2
    assert cart_math.update_quantity(lines, 1, 6)[0]["quantity"] == 2


def test_increase_and_decrease_stay_within_bounds():
    at_max = [_line(1, 10, 5, max_stock=5)]
    at_one = [_line(1, 10, 1, max_stock=5)]

    assert cart_math.increase_quantity(at_max, 1)[0]["quantity"] == 5
    assert cart_math.increase_quantity(at_one, 1)[0]["quantity"] == 2
    assert cart_math.decrease_quantity(at_one, 1)[0]["quantity"] == 1
    assert cart_math.decrease_quantity(at_max, 1)[0]["quantity"] == 4


def test_remove_item():
    lines = [_line(1, 10, 1), _line(2, 20, 1)]

    assert [l["product_id"] for l in cart_math.remove_item(lines, 1)] == [2]
    assert len(lines) == 2


def test_line_total():
    assert cart_math.line_total(_line(1, 2.5, 4)) == 10.0
