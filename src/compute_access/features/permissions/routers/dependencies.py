"""Permission router dependencies.

Placeholder functions that services override through
app.dependency_overrides with their configured implementations.
"""


def get_permission_service():
    """Placeholder for permission service dependency.

    Services should override this to provide a PermissionService wired to
    their node access store, scope store and team directory.
    """
    raise NotImplementedError(
        "Services must provide their own permission service dependency"
    )


def get_current_user_id():
    """Placeholder for the authenticated user's external id.

    Services should override this with their authentication dependency.
    """
    raise NotImplementedError(
        "Services must provide their own current user dependency"
    )
