import pytest

from homeloan.inputs.inputs import AppInputs, InputsLoader, RunOptions, load_inputs
from homeloan.schemas.models import LoanTerms


def test_load_legacy_camelcase_payload(json_inputs_factory):
    path = json_inputs_factory({"loanAmount": "1,000,000", "interestRate": 10.5, "loanTerm": 20, "additionalPayment": "R1,000"})
    cfg = load_inputs(path)
    assert cfg.loan == LoanTerms(principal=1_000_000, annual_rate_percent=10.5, term_years=20, additional_payment=1_000)
    assert cfg.run == RunOptions()


def test_load_structured_payload(json_inputs_factory):
    path = json_inputs_factory(
        {
            "loan": {"principal": 750_000, "annual_rate_percent": 11.75, "term_years": 25},
            "run": {"out": "out/report.md", "calculator": "additional"},
        }
    )
    cfg = InputsLoader().load(path)
    assert cfg.loan.principal == 750_000
    assert cfg.loan.additional_payment == 0.0
    assert cfg.run.out == "out/report.md"
    assert cfg.run.calculator == "additional"


def test_load_json_string():
    cfg = InputsLoader().load_json('{"principal": 500000, "annual_rate_percent": 0, "term_years": 10}')
    assert cfg.loan.annual_rate_percent == 0.0


def test_invalid_json_raises_value_error():
    with pytest.raises(ValueError, match="Invalid JSON"):
        InputsLoader().load_json("{not json")


def test_non_object_payload_rejected():
    with pytest.raises(ValueError):
        InputsLoader().load_json("[1, 2, 3]")


def test_validation_failure_is_value_error(json_inputs_factory):
    path = json_inputs_factory({"principal": -5, "annual_rate_percent": 10, "term_years": 20})
    with pytest.raises(ValueError, match="validation failed"):
        load_inputs(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_inputs(tmp_path / "nope.json")


def test_non_json_suffix_rejected(tmp_path):
    p = tmp_path / "loan.yaml"
    p.write_text("principal: 1", encoding="utf-8")
    with pytest.raises(ValueError, match="only .json"):
        load_inputs(p)


def test_env_overrides(monkeypatch, json_inputs_factory):
    path = json_inputs_factory({"principal": 500_000, "annual_rate_percent": 9, "term_years": 10})
    monkeypatch.setenv("HOMELOAN_OUT", "env.md")
    monkeypatch.setenv("HOMELOAN_CALCULATOR", " Additional ")
    cfg = load_inputs(path)
    assert cfg.run.out == "env.md"
    assert cfg.run.calculator == "additional"


def test_unknown_env_calculator_ignored(monkeypatch, json_inputs_factory):
    path = json_inputs_factory({"principal": 500_000, "annual_rate_percent": 9, "term_years": 10})
    monkeypatch.setenv("HOMELOAN_CALCULATOR", "affordability")
    assert load_inputs(path).run.calculator == "bond"


def test_with_overrides_is_non_destructive():
    loader = InputsLoader()
    base = AppInputs(loan=LoanTerms(principal=100_000, annual_rate_percent=10, term_years=5))
    new = loader.with_overrides(base, out="x.md", term_years=10, additional_payment=250.0)
    assert base.run.out == "bond_report.md"
    assert base.loan.term_years == 5
    assert new.run.out == "x.md"
    assert new.loan.term_years == 10
    assert new.loan.additional_payment == 250.0
    assert loader.with_overrides(base) is base


def test_with_overrides_revalidates():
    base = AppInputs(loan=LoanTerms(principal=100_000, annual_rate_percent=10, term_years=5))
    with pytest.raises(ValueError):
        InputsLoader().with_overrides(base, principal=0.0)
    with pytest.raises(ValueError):
        InputsLoader().with_overrides(base, calculator="transfer")


def test_loan_terms_are_frozen():
    terms = LoanTerms(principal=100_000, annual_rate_percent=10, term_years=5)
    with pytest.raises(Exception):
        terms.principal = 1.0  # type: ignore[misc]
