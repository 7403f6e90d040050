"""
Data access for the booking service.

booking_repository is the Booking Store; enrollment_repository is the
read-only eligibility lookup (enrollments and tickets).
"""
