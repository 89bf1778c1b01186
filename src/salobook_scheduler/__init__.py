'''
Salobook scheduling core.

Availability timelines for staff members and contiguous slot sequencing
for multi-service appointments.
'''
__version__ = "0.1.0"
