"""Exceptions for piecewise quadrature."""


class QuadratureWarning(UserWarning):
    """Warning for quadrature issues (e.g., nudges that cannot move a point)."""

    pass


class IntegrationError(Exception):
    """Error when a delegate rule fails to reach its accuracy."""

    pass
