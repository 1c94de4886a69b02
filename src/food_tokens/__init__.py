"""Food token tracker package.

Organized by feature modules (staff, checkins, control, aggregation, ...)
with a thin Flask controller layer over service/view-model and repository layers.
"""
