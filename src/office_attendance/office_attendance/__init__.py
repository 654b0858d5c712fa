"""Office Attendance package.

Feature modules (attendance, holidays, locations, notifications, users) each
own a model, a repository interface with its MySQL implementation, a service
and a thin Flask controller. The attendance service is the engine that admits
check-ins and check-outs.
"""
