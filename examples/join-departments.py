"""Join employees to their departments, also loading data through Arrow."""

import pyarrow as pa

from tablepyground import ArrowTableSource, Join, JoinKind, Store, dtypes, table
from tablepyground.compute import filtering

emp = table("emp", EmpId=dtypes.UINT64, DeptId=dtypes.UINT64, EmpName=dtypes.TEXT)
dept = table("dept", DeptId=dtypes.UINT64, DeptName=dtypes.TEXT)
vac = table("vac", VacationHrs=dtypes.FLOAT64)


def main() -> None:
    employees = Store.from_columns(
        [
            (emp.EmpId, [0, 2, 5, 6, 8, 9, 10]),
            (emp.DeptId, [1, 2, 1, 1, 3, 4, 4]),
            (emp.EmpName, ["Sally", "Jamie", "Bob", "Cara", "Louis", "Louise", "Ann"]),
        ]
    ).into_view()

    # Text columns, as an external CSV reader would provide them.
    departments = (
        ArrowTableSource(
            pa.table(
                {
                    "id": ["1", "2", "3", "4"],
                    "name": ["Marketing", "Sales", "Manufacturing", "R&D"],
                }
            )
        )
        .load({dept.DeptId: "id", dept.DeptName: "name"})
        .into_view()
    )

    vacations = Store.from_columns(
        [(vac.VacationHrs, [47.3, 54.1, 98.3, 12.2, -1.2, 5.4, 22.5])]
    ).into_view()

    joined = employees.merge(vacations).join(
        departments, Join.equal(emp.DeptId, dept.DeptId, JoinKind.LEFT_OUTER)
    )
    print(joined, end="\n\n")

    overworked = joined.filter(vac.VacationHrs, filtering.less_than(10)).sort_by_label(
        emp.EmpName
    )
    print(overworked.subview([emp.EmpName, dept.DeptName, vac.VacationHrs]))


if __name__ == "__main__":
    main()
