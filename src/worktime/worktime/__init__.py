"""Work-time tracker package.

Organized by feature modules (sessions, workconfig, stats, reminders) with a
thin Flask controller layer over service/repository layers.
"""
