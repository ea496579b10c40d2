"""Service layer — operations returning :class:`ServiceResult`."""
