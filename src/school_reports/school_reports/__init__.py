"""School Reports package.

Feature modules (students, attendance, incidents, reports, ...) keep the same
model / repository / service split, with a thin Flask controller layer on top.
The reporting engine itself (periods, matrix builder, grouped aggregator) is
pure and does no I/O.
"""
