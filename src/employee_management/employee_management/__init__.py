"""Employee Management package.

This package is organized by feature modules (auth, employees, leaves, salaries, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
