"""Melt yearly salary columns and compute the total salary of each year."""

from tablepyground import Store, dtypes, table

salaries = table(
    "salaries",
    EmpId=dtypes.UINT64,
    Year2010=dtypes.FLOAT64,
    Year2011=dtypes.FLOAT64,
    Year2012=dtypes.FLOAT64,
    Year2013=dtypes.FLOAT64,
    Year2014=dtypes.FLOAT64,
)
melted = table("melted", SalaryYear=dtypes.TEXT, Salary=dtypes.FLOAT64)
totals = table("totals", TotalYearlySalary=dtypes.FLOAT64)

YEARS = [
    salaries.Year2010,
    salaries.Year2011,
    salaries.Year2012,
    salaries.Year2013,
    salaries.Year2014,
]


def main() -> None:
    view = Store.from_columns(
        [
            (salaries.EmpId, [0, 1, 2]),
            (salaries.Year2010, [1500, 900, 600]),
            (salaries.Year2011, [1600, 950, 610]),
            (salaries.Year2012, [1700, 1000, None]),
            (salaries.Year2013, [1800, 1050, 630]),
            (salaries.Year2014, [1900, 1100, 640]),
        ]
    ).into_view()
    print(view, end="\n\n")

    long_view = view.melt(YEARS, melted.SalaryYear, melted.Salary)
    print(long_view, end="\n\n")

    yearly = long_view.aggregate(
        [melted.SalaryYear],
        melted.Salary,
        totals.TotalYearlySalary,
        0.0,
        lambda total, salary: total + salary.unwrap_or(0.0),
    )
    print(yearly, end="\n\n")
    print(yearly.view_stats())


if __name__ == "__main__":
    main()
