"""
The managers implement the workflows of the system on top of the
access functions, each raising a :class:`~uvr.service.errors.ServiceError`
when an operation is rejected.
"""
