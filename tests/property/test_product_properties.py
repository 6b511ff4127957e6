"""Property tests for product validation and create/read round-trips."""

from __future__ import annotations

from fastapi.testclient import TestClient
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from product_api.middleware.error_handler import BadRequestError
from product_api.models.product import Product
from product_api.services.product_store import ProductStore
from product_api.validators.product_validator import validate_product


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

# Printable text without control characters or surrogates
_text_alphabet = st.characters(blacklist_categories=("Cs", "Cc"))

valid_names = st.text(alphabet=_text_alphabet, min_size=1, max_size=40).filter(
    lambda name: name.strip() != ""
)
blank_names = st.text(alphabet=" \t\n\r", max_size=5)
descriptions = st.text(alphabet=_text_alphabet, max_size=80)
valid_prices = st.floats(min_value=0.0, max_value=1e9, allow_nan=False, allow_infinity=False)
negative_prices = st.floats(min_value=-1e9, max_value=-1e-6, allow_nan=False, allow_infinity=False)
valid_stock = st.integers(min_value=0, max_value=2**31 - 1)
negative_stock = st.integers(min_value=-(2**31), max_value=-1)

valid_products = st.fixed_dictionaries(
    {
        "name": valid_names,
        "price": valid_prices,
        "description": descriptions,
        "stock": valid_stock,
    }
)

_fixture_settings = settings(
    max_examples=50,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
    deadline=None,
)


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


@settings(max_examples=200)
@given(data=valid_products)
def test_valid_products_pass_validation(data: dict) -> None:
    validate_product(Product(**data))


@settings(max_examples=200)
@given(data=valid_products, name=blank_names, price=negative_prices, stock=negative_stock)
def test_first_violation_wins(data: dict, name: str, price: float, stock: int) -> None:
    cases = [
        ({"name": name, "price": price, "stock": stock}, "name cannot be empty"),
        ({"price": price, "stock": stock}, "price cannot be negative"),
        ({"stock": stock}, "stock cannot be negative"),
    ]
    for overrides, expected in cases:
        try:
            validate_product(Product(**{**data, **overrides}))
        except BadRequestError as exc:
            assert exc.message == expected
        else:
            raise AssertionError(f"expected BadRequestError for {overrides}")


# ---------------------------------------------------------------------------
# HTTP round-trips
# ---------------------------------------------------------------------------


@_fixture_settings
@given(data=valid_products)
def test_create_then_get_round_trip(client: TestClient, data: dict) -> None:
    created = client.post("/products", json=data)
    assert created.status_code == 200
    product_id = created.json()["data"]
    assert isinstance(product_id, int)

    fetched = client.get(f"/products/{product_id}")
    assert fetched.status_code == 200
    assert fetched.json() == {"success": True, "data": {"id": product_id, **data}}


@_fixture_settings
@given(original=valid_products, changes=valid_products)
def test_update_then_get_reflects_changes(
    client: TestClient, original: dict, changes: dict
) -> None:
    product_id = client.post("/products", json=original).json()["data"]

    resp = client.put(f"/products/{product_id}", json=changes)
    assert resp.json() == {"success": True, "data": "Product updated successfully"}

    fetched = client.get(f"/products/{product_id}").json()["data"]
    assert fetched == {"id": product_id, **changes}


@_fixture_settings
@given(
    data=valid_products,
    invalid=st.one_of(
        blank_names.map(lambda name: {"name": name}),
        negative_prices.map(lambda price: {"price": price}),
        negative_stock.map(lambda stock: {"stock": stock}),
    ),
)
def test_invalid_input_never_writes(
    client: TestClient, store: ProductStore, data: dict, invalid: dict
) -> None:
    before = store.list_all()

    created = client.post("/products", json={**data, **invalid})
    assert created.status_code == 400
    assert created.json()["success"] is False
    assert store.list_all() == before

    if before:
        target = before[0]
        updated = client.put(f"/products/{target.id}", json={**data, **invalid})
        assert updated.status_code == 400
        assert store.get_by_id(target.id) == target


@_fixture_settings
@given(data=valid_products)
def test_deleted_ids_stay_not_found(client: TestClient, data: dict) -> None:
    product_id = client.post("/products", json=data).json()["data"]
    assert client.delete(f"/products/{product_id}").status_code == 200

    for _ in range(2):
        assert client.delete(f"/products/{product_id}").status_code == 404
        assert client.get(f"/products/{product_id}").status_code == 404
        assert client.put(f"/products/{product_id}", json=data).status_code == 404
