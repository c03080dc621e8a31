"""
Adversarial tests for token guessing and replay.

Verifies that verification codes and reset tokens cannot be:
- Guessed by trying nearby or malformed values
- Replayed after use, after expiry or after being superseded
- Used for a different purpose or a different account

Also checks that a login attempt for an unknown account still pays the
cost of a bcrypt comparison.
"""

from unittest.mock import patch

import pytest

from src.domain.auth import AuthService
from src.domain.credentials import CredentialStore
from src.domain.exceptions import InvalidToken
from src.domain.models import TokenPurpose
from src.domain.tokens import TokenLedger
from tests.conftest import FakeClock, RecordingEmailSender

pytestmark = pytest.mark.adversarial

OWNER = "6f1c2b8e-2d0a-4c3b-9a55-0f3e8b7d1a01"
OTHER_OWNER = "0b7e4c1d-9f2a-4e6b-8c3d-5a1f2e3d4c5b"


class TestGuessing:
    def test_wrong_guesses_never_succeed(self, ledger: TokenLedger) -> None:
        """Attack scenario: attacker sprays codes around the real one."""
        otp = ledger.issue(OWNER, TokenPurpose.VERIFY)
        guesses = {f"{(int(otp) + delta) % 1_000_000:06d}" for delta in range(-50, 51)} - {otp}

        for guess in guesses:
            assert ledger.consume(OWNER, TokenPurpose.VERIFY, guess) is False

        assert ledger.consume(OWNER, TokenPurpose.VERIFY, otp) is True

    @pytest.mark.parametrize("presented", ["", "   ", None, 123456, "0" * 64, "%", "' OR 1=1 --"])
    def test_malformed_input_fails_closed(self, ledger: TokenLedger, presented: object) -> None:
        ledger.issue(OWNER, TokenPurpose.RESET)

        assert ledger.validate(OWNER, TokenPurpose.RESET, presented) is False
        assert ledger.consume(OWNER, TokenPurpose.RESET, presented) is False

    def test_reset_token_has_full_entropy(self, ledger: TokenLedger) -> None:
        tokens = {ledger.issue(OWNER, TokenPurpose.RESET) for _ in range(50)}

        assert len(tokens) == 50
        assert all(len(token) == 64 for token in tokens)


class TestReplay:
    def test_consumed_token_cannot_be_replayed(self, ledger: TokenLedger) -> None:
        token = ledger.issue(OWNER, TokenPurpose.RESET)
        assert ledger.consume(OWNER, TokenPurpose.RESET, token) is True

        assert ledger.consume(OWNER, TokenPurpose.RESET, token) is False
        assert ledger.validate(OWNER, TokenPurpose.RESET, token) is False

    def test_superseded_token_is_invalid(self, ledger: TokenLedger) -> None:
        first = ledger.issue(OWNER, TokenPurpose.VERIFY)
        second = ledger.issue(OWNER, TokenPurpose.VERIFY)

        if first != second:
            assert ledger.consume(OWNER, TokenPurpose.VERIFY, first) is False
        assert ledger.consume(OWNER, TokenPurpose.VERIFY, second) is True

    def test_expired_token_is_invalid(self, ledger: TokenLedger, clock: FakeClock) -> None:
        token = ledger.issue(OWNER, TokenPurpose.RESET)
        clock.advance(3600)

        assert ledger.validate(OWNER, TokenPurpose.RESET, token) is False
        assert ledger.consume(OWNER, TokenPurpose.RESET, token) is False

    def test_token_is_bound_to_purpose(self, ledger: TokenLedger) -> None:
        """A verification code cannot be presented as a reset token."""
        otp = ledger.issue(OWNER, TokenPurpose.VERIFY)

        assert ledger.consume(OWNER, TokenPurpose.RESET, otp) is False
        assert ledger.validate(OWNER, TokenPurpose.VERIFY, otp) is True

    def test_token_is_bound_to_owner(self, ledger: TokenLedger) -> None:
        """Attack scenario: attacker's own reset link replayed against a victim."""
        ledger.issue(OWNER, TokenPurpose.RESET)
        attacker_token = ledger.issue(OTHER_OWNER, TokenPurpose.RESET)

        assert ledger.consume(OWNER, TokenPurpose.RESET, attacker_token) is False
        assert ledger.consume(OTHER_OWNER, TokenPurpose.RESET, attacker_token) is True

    def test_reset_link_for_other_account_rejected(
        self, service: AuthService, email_sender: RecordingEmailSender
    ) -> None:
        victim = service.register("Victim", "victim@x.com", "555", "Secret1")
        service.verify(victim.id, email_sender.last_otp())
        attacker = service.register("Mallory", "mallory@x.com", "555", "Secret1")
        service.verify(attacker.id, email_sender.last_otp())
        service.forgot_password("mallory@x.com")
        attacker_token = email_sender.last_reset_token()

        with pytest.raises(InvalidToken):
            service.reset_password(victim.id, attacker_token, "Hijacked1")

        assert service.login("victim@x.com", "Secret1").user.id == victim.id


class TestUnknownAccountCost:
    def test_password_check_without_user_still_runs_bcrypt(
        self, credentials: CredentialStore
    ) -> None:
        with patch("src.domain.credentials.bcrypt.checkpw", return_value=True) as checkpw:
            assert credentials.verify_password(None, "anything") is False

        checkpw.assert_called_once()
