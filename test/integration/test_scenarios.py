from tablepyground import Join
from tablepyground.compute import filtering
from tablepyground.compute.sorting import sort_order
from tablepyground.store import FieldData, Store, Tablespace, dtypes
from tablepyground.store.value import Exists
from tablepyground.view import Permutation

SPACE = Tablespace()
EMP = SPACE.table("emp", EmpId=dtypes.UINT64, DeptId=dtypes.UINT64, EmpName=dtypes.TEXT)
VAC = SPACE.table("vac", VacationHrs=dtypes.FLOAT64)
DEPT = SPACE.table("dept", DeptId=dtypes.UINT64, DeptName=dtypes.TEXT)
YEARS = [f"Year{year}" for year in range(2010, 2015)]
SAL = SPACE.table(
    "sal", [("EmpId", dtypes.UINT64)] + [(name, dtypes.FLOAT64) for name in YEARS]
)
MELTED = SPACE.table("melted", SalaryYear=dtypes.TEXT, Salary=dtypes.FLOAT64)
TOTALS = SPACE.table("totals", TotalYearlySalary=dtypes.FLOAT64)

SALARIES = {
    "Year2010": [1500, 900, 600],
    "Year2011": [1600, 950, 650],
    "Year2012": [1700, 1000, 700],
    "Year2013": [1800, None, 750],
    "Year2014": [1900, 1100, 800],
}


def employees():
    return Store.from_columns(
        [
            (EMP.EmpId, [0, 2, 5, 6, 8, 9, 10]),
            (EMP.DeptId, [1, 2, 1, 1, 3, 4, 4]),
            (EMP.EmpName, ["Sally", "Jamie", "Bob", "Cara", "Louis", "Louise", "Ann"]),
        ]
    ).into_view()


def melted_salaries():
    store = Store.from_columns(
        [(SAL.EmpId, [0, 1, 2])] + [(SAL[name], SALARIES[name]) for name in YEARS]
    )
    view = store.into_view()
    return view.melt([SAL[name] for name in YEARS], MELTED.SalaryYear, MELTED.Salary)


def test_merge_stores_with_same_rows():
    vacations = Store.from_columns(
        [(VAC.VacationHrs, [47.3, 54.1, 98.3, 12.2, -1.2, 5.4, 22.5])]
    ).into_view()
    merged = employees().merge(vacations)
    assert merged.fieldnames() == ["EmpId", "DeptId", "EmpName", "VacationHrs"]
    assert merged.nrows() == 7
    assert merged.field(VAC.VacationHrs).get(2) == Exists(98.3)


def test_inner_join_on_department():
    departments = Store.from_columns(
        [
            (DEPT.DeptId, [1, 2, 3, 4]),
            (DEPT.DeptName, ["Marketing", "Sales", "Manufacturing", "R&D"]),
        ]
    ).into_view()
    joined = employees().join(departments, Join.equal(EMP.DeptId, DEPT.DeptId))
    assert joined.nrows() == 7
    names = dict(
        zip(joined.field(EMP.EmpName).to_pylist(), joined.field(DEPT.DeptName).to_pylist())
    )
    assert names["Louis"] == "Manufacturing"
    assert joined.subview([EMP.EmpName, DEPT.DeptName]).to_arrow().to_pydict() == {
        "EmpName": ["Sally", "Bob", "Cara", "Jamie", "Louis", "Louise", "Ann"],
        "DeptName": [
            "Marketing",
            "Marketing",
            "Marketing",
            "Sales",
            "Manufacturing",
            "R&D",
            "R&D",
        ],
    }


def test_sort_with_missing_and_nan():
    values = [2.0, 5.4, 3.1, 1.1, 8.2]
    assert sort_order(FieldData.from_values(dtypes.FLOAT64, values)) == [3, 0, 2, 1, 4]
    values[2] = None
    assert sort_order(FieldData.from_values(dtypes.FLOAT64, values)) == [2, 3, 0, 1, 4]
    values[1] = float("nan")
    assert sort_order(FieldData.from_values(dtypes.FLOAT64, values)) == [2, 1, 3, 0, 4]


def test_filter_exists():
    region = SPACE.label("Region", dtypes.TEXT)
    view = Store.from_columns(
        [(region, ["North", "South", "East", "West", "North", None, "South"])]
    ).into_view()
    filtered = view.filter(region, filtering.exists)
    assert filtered.frames[0].permutation == Permutation([0, 1, 2, 3, 4, 6])
    assert filtered.field(region).to_pylist() == [
        "North",
        "South",
        "East",
        "West",
        "North",
        "South",
    ]


def test_melt_salary_years():
    melted = melted_salaries()
    assert melted.nrows() == 15
    assert melted.fieldnames() == ["EmpId", "SalaryYear", "Salary"]
    emp_ids = melted.field(SAL.EmpId).to_pylist()
    years = melted.field(MELTED.SalaryYear).to_pylist()
    salaries = melted.field(MELTED.Salary).to_pylist()
    for i in range(3):
        for k, name in enumerate(YEARS):
            row = i * 5 + k
            assert emp_ids[row] == i
            assert years[row] == name
            assert salaries[row] == SALARIES[name][i]


def test_aggregate_after_melt():
    totals = melted_salaries().aggregate(
        [MELTED.SalaryYear],
        MELTED.Salary,
        TOTALS.TotalYearlySalary,
        0.0,
        lambda acc, value: acc + value.unwrap_or(0.0),
    )
    assert totals.nrows() == 5
    assert totals.to_arrow().to_pydict() == {
        "SalaryYear": YEARS,
        "TotalYearlySalary": [3000.0, 3200.0, 3400.0, 2550.0, 3800.0],
    }
