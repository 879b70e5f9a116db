# homeloan/inputs/inputs.py
"""
Inputs loader for the home loan calculators.

Goals
-----
- Deterministic, file-first inputs with validation via Pydantic.
- Accept both a bare LoanTerms payload (as posted by the calculator forms)
  and a structured payload that also carries run options.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shapes
---------------------
1) Legacy (root = LoanTerms, snake_case or camelCase)
   {"loanAmount": 1000000, "interestRate": 10.5, "loanTerm": 20, "additionalPayment": 1000}

2) Structured (root = AppInputs)
   {
     "loan": { ... LoanTerms ... },
     "run": {"out": "bond_report.md", "calculator": "bond"}
   }

Environment overrides (optional)
--------------------------------
- HOMELOAN_OUT         -> AppInputs.run.out
- HOMELOAN_CALCULATOR  -> AppInputs.run.calculator ("bond" | "additional")

Public API
----------
- class InputsLoader:
    - load(path: str | Path | None) -> AppInputs
    - load_json(text: str) -> AppInputs
    - with_overrides(cfg, **kwargs) -> AppInputs (non-destructive copies)
- function load_inputs(path: str | Path | None) -> AppInputs  (convenience)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import BaseModel, Field, ValidationError

from homeloan.schemas.models import LoanTerms

CalculatorName = Literal["bond", "additional"]
CALCULATORS: tuple[str, ...] = ("bond", "additional")

# ----------------------------
# Pydantic models for structured inputs
# ----------------------------


class RunOptions(BaseModel):
    """Runtime (non-financial) options controlling the report run."""

    out: str = Field("bond_report.md", description="Path to write the Markdown report.")
    calculator: CalculatorName = Field("bond", description='Report type: "bond" or "additional".')


class AppInputs(BaseModel):
    """
    Full input payload.

    Attributes:
        loan: The validated LoanTerms fed to the amortization engine.
        run:  Non-financial, runtime options for the current execution.
    """

    loan: LoanTerms
    run: RunOptions = RunOptions()


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class InputsLoader:
    """
    File-first inputs loader with light env overrides.

    Default search (when path=None):
        1) ./data/sample/loan.json
        2) ./config.json
    """

    env_prefix: str = "HOMELOAN_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> AppInputs:
        """
        Load inputs from a JSON file (path). If path is None, try defaults.
        """
        p = self._resolve_path(path)
        raw = self._read_json_file(p)
        cfg = self._parse_root(self._maybe_translate_legacy(raw))
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> AppInputs:
        """
        Load inputs from a JSON string (either shape).
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Inputs payload must be a JSON object.")
        cfg = self._parse_root(self._maybe_translate_legacy(raw))
        return self._apply_env_overrides(cfg)

    def with_overrides(
        self,
        cfg: AppInputs,
        *,
        out: str | None = None,
        calculator: str | None = None,
        principal: float | None = None,
        annual_rate_percent: float | None = None,
        term_years: int | None = None,
        additional_payment: float | None = None,
    ) -> AppInputs:
        """
        Return a *new* AppInputs with provided non-null overrides applied.
        Loan overrides are re-validated through LoanTerms.
        """
        run_updates: dict[str, Any] = {}
        if out is not None:
            run_updates["out"] = out
        if calculator is not None:
            run_updates["calculator"] = calculator

        loan_updates: dict[str, Any] = {}
        if principal is not None:
            loan_updates["principal"] = principal
        if annual_rate_percent is not None:
            loan_updates["annual_rate_percent"] = annual_rate_percent
        if term_years is not None:
            loan_updates["term_years"] = term_years
        if additional_payment is not None:
            loan_updates["additional_payment"] = additional_payment

        if not run_updates and not loan_updates:
            return cfg

        try:
            run_new = RunOptions.model_validate({**cfg.run.model_dump(), **run_updates})
            loan_new = LoanTerms.model_validate({**cfg.loan.model_dump(), **loan_updates})
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e
        return cfg.model_copy(update={"run": run_new, "loan": loan_new})

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Inputs file not found: {p}")
            return p

        for candidate in (Path("data/sample/loan.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        raise FileNotFoundError("No inputs path provided and no default inputs found. Looked for ./data/sample/loan.json and ./config.json.")

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported inputs format for {p.name}; only .json is supported.")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Inputs in {p} must be a JSON object.")
        return cast(dict[str, Any], data)

    def _maybe_translate_legacy(self, raw: dict[str, Any]) -> dict[str, Any]:
        """
        Accept legacy (LoanTerms at root) or structured (AppInputs shape).
        Form payloads send currency as strings ("1,000,000"); strip separators.
        """
        if "loan" in raw:
            return raw

        loan: dict[str, Any] = {}
        for key, value in raw.items():
            if isinstance(value, str) and key in {"loanAmount", "principal", "additionalPayment", "additional_payment"}:
                value = value.replace(",", "").replace(" ", "").lstrip("R")
            loan[key] = value
        return {"loan": loan}

    def _parse_root(self, data: dict[str, Any]) -> AppInputs:
        try:
            return AppInputs.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Inputs validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: AppInputs) -> AppInputs:
        """
        Apply light, optional overrides from environment variables to run options.
        """
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        out = os.getenv(f"{prefix}OUT")
        if out:
            updates["out"] = out

        calculator = os.getenv(f"{prefix}CALCULATOR")
        if calculator:
            normalized = calculator.strip().lower()
            # Ignore unknown values; keep validated cfg.calculator
            if normalized in CALCULATORS:
                updates["calculator"] = normalized

        if not updates:
            return cfg

        run_new = cfg.run.model_copy(update=updates)
        return cfg.model_copy(update={"run": run_new})


# ----------------------------
# Convenience function
# ----------------------------


def load_inputs(path: str | Path | None = None) -> AppInputs:
    """Convenience wrapper for one-shot callers."""
    return InputsLoader().load(path)
