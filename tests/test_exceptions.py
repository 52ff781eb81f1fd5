"""Tests for custom exception hierarchy."""

from realty_escrow.exceptions import (
    ApprovalRequiredError,
    AuthorizationError,
    ConfigurationError,
    EntityNotFoundError,
    EscrowError,
    InsufficientFundsError,
    InvalidAddressError,
    InvalidEntityStateError,
    InvalidValueError,
    ListingNotFoundError,
    PrecursorError,
    SinkError,
    TokenNotFoundError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_escrow_error_is_exception(self) -> None:
        assert isinstance(EscrowError("test"), Exception)

    def test_authorization_error_is_escrow_error(self) -> None:
        err = AuthorizationError("test")
        assert isinstance(err, EscrowError)
        assert not isinstance(err, PrecursorError)

    def test_not_found_errors_are_precursor_errors(self) -> None:
        for cls in (TokenNotFoundError, ListingNotFoundError):
            err = cls("test")
            assert isinstance(err, EntityNotFoundError)
            assert isinstance(err, PrecursorError)

    def test_approval_required_is_invalid_state(self) -> None:
        err = ApprovalRequiredError("test")
        assert isinstance(err, InvalidEntityStateError)
        assert isinstance(err, PrecursorError)

    def test_insufficient_funds_is_precursor_error(self) -> None:
        assert isinstance(InsufficientFundsError("test"), PrecursorError)

    def test_invalid_value_is_value_error(self) -> None:
        err = InvalidAddressError("test")
        assert isinstance(err, InvalidValueError)
        assert isinstance(err, ValueError)
        assert isinstance(err, EscrowError)

    def test_configuration_and_sink_errors(self) -> None:
        assert isinstance(ConfigurationError("test"), EscrowError)
        assert isinstance(SinkError("test"), EscrowError)

    def test_exception_message(self) -> None:
        err = TokenNotFoundError("Token 7 not found")
        assert str(err) == "Token 7 not found"
