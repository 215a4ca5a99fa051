"""Staff scheduling package.

Feature modules (schedules, employees, rotation, assignments, attendance,
leave) each carry a model, a repository interface with its MySQL
implementation, a service holding the business rules and a thin Flask
controller.
"""
