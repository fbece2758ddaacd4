import warnings

import pytest

from torchpiecewise.quadrature import (
    IntegrationError,
    QuadratureWarning,
)


class TestExceptions:
    def test_quadrature_warning_is_user_warning(self):
        assert issubclass(QuadratureWarning, UserWarning)

    def test_integration_error_is_exception(self):
        assert issubclass(IntegrationError, Exception)

    def test_quadrature_warning_can_be_filtered(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", QuadratureWarning)
            with pytest.raises(QuadratureWarning, match="nudge"):
                warnings.warn("nudge", QuadratureWarning)

    def test_integration_error_carries_message(self):
        with pytest.raises(IntegrationError, match="converge"):
            raise IntegrationError("failed to converge")
