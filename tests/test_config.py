import pytest
from pydantic import ValidationError

from loansim.config import Settings
from loansim.models.loan import Capitalization, RateMode


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOANSIM_DEFAULT_RATE_MODE", raising=False)
        monkeypatch.delenv("LOANSIM_DEFAULT_CAPITALIZATION", raising=False)
        s = Settings(_env_file=None)
        assert s.default_rate_mode is RateMode.EFFECTIVE
        assert s.default_capitalization is Capitalization.MONTHLY

    def test_env_values_become_enums(self, monkeypatch):
        monkeypatch.setenv("LOANSIM_DEFAULT_RATE_MODE", "nominal")
        monkeypatch.setenv("LOANSIM_DEFAULT_CAPITALIZATION", "quarterly")
        s = Settings(_env_file=None)
        assert s.default_rate_mode is RateMode.NOMINAL
        assert s.default_capitalization is Capitalization.QUARTERLY

    @pytest.mark.parametrize("var", ["LOANSIM_DEFAULT_RATE_MODE", "LOANSIM_DEFAULT_CAPITALIZATION"])
    def test_unknown_value_rejected_at_load(self, monkeypatch, var):
        monkeypatch.setenv(var, "weekly")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)
