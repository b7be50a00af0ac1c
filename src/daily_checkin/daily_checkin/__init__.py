"""Daily check-in package.

Organized by feature modules (roster, checkin, evidence, notifications,
reminders, summary, scheduler) with a thin Flask controller layer over
service/repository layers.
"""
