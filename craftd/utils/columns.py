# craftd/utils/columns.py

# Salary-by-year series
YEAR = "year"
SALARY = "salary"
TOTAL_COMP = "total_comp"
COMPANY = "company"
TITLE = "title"

SALARY_BY_YEAR_COLS = [YEAR, SALARY, TOTAL_COMP, COMPANY, TITLE]

# Heatmap day frame
DAY = "date"
COUNT = "count"
INTENSITY = "intensity"
WEEKDAY = "weekday"

HEATMAP_DAY_COLS = [DAY, COUNT, INTENSITY, WEEKDAY]

# Employment-period CSV date columns
START_DATE = "start_date"
END_DATE = "end_date"

PERIOD_DATE_COLS = [START_DATE, END_DATE]
