# intake_wizard.py
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel

from record_store import StoreError
from site_content import state_name


class WizardFormState(BaseModel):
    state: str = ""
    package_id: str = ""
    company_name: str = ""
    business_type: Literal["single-member", "multi-member"] = "single-member"
    business_purpose: str = ""
    member_name: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    city: str = ""
    zip_code: str = ""

    model_config = {"validate_assignment": True}


class StepDescriptor(BaseModel):
    ordinal: int
    label: str
    required: Tuple[str, ...] = ()

    model_config = {"frozen": True}

    def is_satisfied(self, form: WizardFormState) -> bool:
        return all(getattr(form, f) != "" for f in self.required)


STEPS: Tuple[StepDescriptor, ...] = (
    StepDescriptor(ordinal=1, label="State Selection", required=("state",)),
    StepDescriptor(ordinal=2, label="Package Selection", required=("package_id",)),
    StepDescriptor(ordinal=3, label="Business Information", required=("company_name", "business_purpose")),
    StepDescriptor(ordinal=4, label="Contact Information",
                   required=("member_name", "email", "phone", "address", "city", "zip_code")),
    StepDescriptor(ordinal=5, label="Review & Submit"),
)
FIRST_STEP = STEPS[0].ordinal
LAST_STEP = STEPS[-1].ordinal


class SubmitResult(BaseModel):
    ok: bool
    message: str
    application_id: Optional[str] = None
    navigate_to: Optional[str] = None


class WizardClosedError(RuntimeError):
    """The wizard already submitted successfully and takes no more input."""


class IntakeWizard:
    """
    Five-step LLC intake. Forward moves are gated on the current step's
    required fields; backward moves are always allowed; submit only on the
    review step and writes exactly one application row.
    """

    def __init__(self, user_id: str, *, email: str = "", package_id: str = "") -> None:
        self.user_id = user_id
        self.step = FIRST_STEP
        self.form = WizardFormState(email=email or "", package_id=package_id or "")
        self.submitting = False
        self.finished = False

    @property
    def descriptor(self) -> StepDescriptor:
        return STEPS[self.step - 1]

    def set_field(self, name: str, value: str) -> None:
        if self.finished:
            raise WizardClosedError("application already submitted")
        if name not in WizardFormState.model_fields:
            raise KeyError(name)
        setattr(self.form, name, value if value is not None else "")

    def update(self, **values: str) -> None:
        for name, value in values.items():
            self.set_field(name, value)

    def is_step_valid(self, step: Optional[int] = None) -> bool:
        step = self.step if step is None else step
        if not FIRST_STEP <= step <= LAST_STEP:
            raise ValueError(f"step must be between {FIRST_STEP} and {LAST_STEP}, got {step}")
        return STEPS[step - 1].is_satisfied(self.form)

    def can_go_next(self) -> bool:
        return not self.finished and self.step < LAST_STEP and self.is_step_valid()

    def can_go_back(self) -> bool:
        return not self.finished and self.step > FIRST_STEP

    def next(self) -> bool:
        if not self.can_go_next():
            print(f"[WIZARD LOG] ⛔ next rejected at step {self.step}")
            return False
        self.step += 1
        print(f"[WIZARD LOG] ▶ step {self.step - 1} → {self.step}")
        return True

    def back(self) -> bool:
        if not self.can_go_back():
            return False
        self.step -= 1
        print(f"[WIZARD LOG] ◀ step {self.step + 1} → {self.step}")
        return True

    def progress(self) -> List[Dict[str, object]]:
        out = []
        for s in STEPS:
            if self.step > s.ordinal:
                status = "done"
            elif self.step == s.ordinal:
                status = "current"
            else:
                status = "upcoming"
            out.append({"ordinal": s.ordinal, "label": s.label, "status": status})
        return out

    def application_record(self) -> Dict[str, object]:
        f = self.form
        return {
            "user_id": self.user_id,
            "package_id": f.package_id,
            "state": f.state,
            "company_name": f.company_name,
            "form_data": {
                "memberName": f.member_name,
                "email": f.email,
                "phone": f.phone,
                "address": f.address,
                "city": f.city,
                "zipCode": f.zip_code,
                "businessType": f.business_type,
                "businessPurpose": f.business_purpose,
            },
            "status": "pending",
            "payment_status": "pending",
        }

    def review_summary(self, packages: Optional[List[Dict[str, object]]] = None) -> Dict[str, str]:
        f = self.form
        package_name = ""
        for pkg in packages or []:
            if pkg.get("id") == f.package_id:
                package_name = str(pkg.get("name", ""))
                break
        return {
            "State": state_name(f.state) or "",
            "Package": package_name,
            "Business Details": f"Company Name: {f.company_name}\nType: {f.business_type}\nPurpose: {f.business_purpose}",
            "Contact Information": (
                f"Name: {f.member_name}\nEmail: {f.email}\nPhone: {f.phone}\n"
                f"Address: {f.address}, {f.city}, {f.zip_code}"
            ),
        }

    def submit(self, store) -> SubmitResult:
        if self.finished:
            return SubmitResult(ok=False, message="This application was already submitted.")
        if self.step != LAST_STEP:
            return SubmitResult(ok=False, message="Please complete every step before submitting.")
        if self.submitting:
            return SubmitResult(ok=False, message="Your application is already being submitted.")

        self.submitting = True
        try:
            row = store.insert("llc_applications", self.application_record())
        except StoreError as e:
            print(f"[WIZARD LOG] ❌ Error submitting application: {e}")
            return SubmitResult(ok=False, message="Error submitting application. Please try again.")
        finally:
            self.submitting = False

        self.finished = True
        print(f"[WIZARD LOG] ✅ application submitted id={row.get('id')}")
        return SubmitResult(
            ok=True,
            message="Application submitted successfully! You will be redirected to payment.",
            application_id=row.get("id"),
            navigate_to="dashboard",
        )
