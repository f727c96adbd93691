"""Institute Ledger package.

Fee ledger and attendance accounting for a training institute, organized by
feature modules (students, fees, attendance) with a thin Flask controller
layer over service/repository layers.
"""
