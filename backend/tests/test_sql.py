import pytest

from jobly.core.errors import BadRequestError
from jobly.db.sql import sql_for_partial_update


def test_partial_update_single_field():
    result = sql_for_partial_update({"f1": "Aliya"}, {"f1": "f1", "fF2": "f2"})
    assert result.fragments == ['"f1"=$1']
    assert result.values == ["Aliya"]
    assert result.set_cols == '"f1"=$1'


def test_partial_update_maps_column_names_in_key_order():
    result = sql_for_partial_update(
        {"firstName": "Aliya", "age": 32, "isAdmin": True},
        {"firstName": "first_name", "isAdmin": "is_admin"},
    )
    assert result.fragments == ['"first_name"=$1', '"age"=$2', '"is_admin"=$3']
    assert result.values == ["Aliya", 32, True]
    assert result.set_cols == '"first_name"=$1, "age"=$2, "is_admin"=$3'


def test_partial_update_without_column_map():
    result = sql_for_partial_update({"title": "New", "salary": 500})
    assert result.set_cols == '"title"=$1, "salary"=$2'


def test_partial_update_keeps_empty_string():
    result = sql_for_partial_update({"f1": ""}, {"f1": "f1", "fF2": "f2"})
    assert result.set_cols == '"f1"=$1'
    assert result.values == [""]


def test_partial_update_keeps_none():
    result = sql_for_partial_update({"salary": None})
    assert result.values == [None]


def test_partial_update_rejects_empty_data():
    with pytest.raises(BadRequestError) as exc_info:
        sql_for_partial_update({}, {"f1": "f1"})
    assert exc_info.value.message == "No data"
