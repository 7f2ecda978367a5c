"""Groona alerting backend.

Hosts the alert scheduler, the alert-generation tasks, notification store
maintenance and transactional email helpers.
"""
