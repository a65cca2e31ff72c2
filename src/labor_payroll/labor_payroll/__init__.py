"""Labor Payroll package.

Timesheet ("chấm công"), wage, debt and payroll-batch management for a
construction labor crew. Organized by feature modules (workers, projects,
timesheet, payroll, ...) with a thin Flask controller layer on top of
service/repository layers.
"""
