import pytest

from tablepyground.errors import (
    DimensionMismatchError,
    LabelCollisionError,
    LabelNotFoundError,
    SealedFieldError,
    TypeMismatchError,
)
from tablepyground.store import FieldData, Store, Tablespace, dtypes
from tablepyground.store.value import Exists, Missing
from tablepyground.view import View

SPACE = Tablespace()
EMP = SPACE.table("emp", EmpId=dtypes.UINT64, DeptId=dtypes.UINT64, EmpName=dtypes.TEXT)
OTHER = SPACE.table("other", EmpId=dtypes.UINT64)


@pytest.fixture
def store():
    return Store.from_columns(
        [
            (EMP.EmpId, [0, 2, 5]),
            (EMP.DeptId, [1, None, 1]),
            (EMP.EmpName, ["Sally", "Jamie", "Bob"]),
        ]
    )


def test_empty_store():
    store = Store.empty()
    assert store.nrows() == 0
    assert store.nfields() == 0
    assert store.is_uniform()


def test_store_fields(store):
    assert store.nrows() == 3
    assert store.nfields() == 3
    assert store.fieldnames() == ["EmpId", "DeptId", "EmpName"]
    assert store.field_types() == [dtypes.UINT64, dtypes.UINT64, dtypes.TEXT]
    assert store.labels() == [EMP.EmpId, EMP.DeptId, EMP.EmpName]
    assert store.label("DeptId") is EMP.DeptId
    assert EMP.EmpName in store
    assert OTHER.EmpId not in store
    assert list(store.select_field(EMP.DeptId)) == [Exists(1), Missing, Exists(1)]


def test_push_field_returns_new_store(store):
    extended = store.push_field(OTHER.EmpId, FieldData.from_values(dtypes.UINT64, [7, 8, 9]))
    assert extended.nfields() == 4
    assert store.nfields() == 3
    # Columns are shared, not copied
    assert extended.select_field(EMP.EmpId) is store.select_field(EMP.EmpId)


def test_push_field_collision(store):
    with pytest.raises(LabelCollisionError):
        store.push_field_from_iter(EMP.EmpId, [1, 2, 3])


def test_push_field_wrong_type(store):
    with pytest.raises(TypeMismatchError):
        store.push_field(OTHER.EmpId, FieldData.from_values(dtypes.TEXT, ["a", "b", "c"]))


def test_select_missing_field(store):
    with pytest.raises(LabelNotFoundError):
        store.select_field(OTHER.EmpId)


def test_nrows_while_building():
    store = Store.empty().push_field_from_iter(EMP.EmpId, [1, 2, 3])
    store = store.push_empty_field(EMP.EmpName)
    assert store.nrows() == 3
    assert not store.is_uniform()
    with pytest.raises(DimensionMismatchError):
        store.into_view()


def test_into_view(store):
    view = store.into_view()
    assert isinstance(view, View)
    assert view.fieldnames() == store.fieldnames()
    assert view.nrows() == 3
    assert view.nframes() == 1


def test_stored_fields_are_sealed(store):
    view = store.into_view()
    field = store.select_field(EMP.EmpId)
    assert field.sealed
    with pytest.raises(SealedFieldError):
        field.push(4)
    assert len(field) == 3
    assert view.nrows() == 3


def test_push_field_seals_the_field(store):
    extra = FieldData.from_values(dtypes.UINT64, [1, 2, 3])
    assert not extra.sealed
    store.push_field(OTHER.EmpId, extra)
    with pytest.raises(SealedFieldError):
        extra.push(4)
