# Routes package init
"""
Portfolio Backend: API Routes Package
======================================

Route Inventory:
    - contact.py:  POST /contacts       (submit the contact form)
    - status.py:   GET  /auth/status    (liveness probe, no logic)
    - health.py:   GET  /health         (version, uptime, database check)

Routes are thin: they parse the request, call the workflow, and choose a
status code. The static site is mounted after these in main.py.
"""
