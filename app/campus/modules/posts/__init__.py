"""
Posts module.

One generic entity for lost & found items, notes, forum doubts, events and
club announcements. Notes are scoped to students by branch/semester; events
can only be created by admins or the lead of the target club.
"""
