"""Hotel staff scheduling package.

Feature modules (calendar, schedules, absences) each carry a model, a
repository protocol with its MySQL implementation and a store/service layer.
The engine composes them behind a thin Flask controller layer.
"""
