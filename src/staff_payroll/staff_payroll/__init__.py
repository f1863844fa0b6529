"""Staff Payroll package.

Feature modules (attendance, leaves, payroll, stores, users) each hold a
domain model, a repository protocol and a service; a thin Flask controller
layer sits on top and MySQL / in-memory repositories sit below.
"""
