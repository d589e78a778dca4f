"""Phase 6: forms, validation and interactions."""

from __future__ import annotations

from frontfix.validators.base import Phase, SignalCheck, at_least, signal

PHASE = Phase(
    number=6,
    key="forms",
    title="Forms, Validation & Interactions",
    checks=(
        SignalCheck(
            title="Form components",
            file_set="components",
            thresholds=(
                at_least(signal("form components", "<form", "onSubmit"), 3),
                at_least(signal("form libraries", "react-hook-form", "useForm", "formik", "Formik")),
            ),
            issue="Form components not properly structured",
        ),
        SignalCheck(
            title="Validation schemas",
            file_set="source",
            thresholds=(
                at_least(signal("validation modules", "validate", "validation"), 3),
                at_least(signal("schema libraries", "zod", "yup")),
            ),
            issue="Validation schemas not well implemented",
        ),
        SignalCheck(
            title="Form submission",
            file_set="source",
            thresholds=(
                at_least(signal("submissions", "onSubmit", "handleSubmit"), 5),
                at_least(signal("async submissions", "submit", "Submit", all_of=("async",)), 3),
            ),
            issue="Form submission not well implemented",
        ),
        SignalCheck(
            title="Error message display",
            file_set="source",
            thresholds=(
                at_least(signal("error messages", all_of=("error", "message")), 5),
                at_least(signal("error components", "ErrorMessage", "ErrorText", "FormError"), 2),
            ),
            issue="Error message display not well implemented",
        ),
        SignalCheck(
            title="Form accessibility",
            file_set="components",
            thresholds=(
                at_least(signal("form labels", "<label", "htmlFor"), 5),
                at_least(signal("aria labels", "aria-label", "aria-labelledby"), 3),
            ),
            issue="Form accessibility not well implemented",
        ),
        SignalCheck(
            title="Interactive elements",
            file_set="components",
            thresholds=(
                at_least(signal("interactive elements", "onClick", "onChange", "onSubmit"), 10),
                at_least(signal("button states", "disabled", "isLoading", "loading"), 5),
            ),
            issue="Interactive elements not well implemented",
        ),
        SignalCheck(
            title="Validation feedback",
            file_set="source",
            thresholds=(
                at_least(signal("real-time validation", "onChange", "onBlur", all_of=("validate",)), 2),
                at_least(signal("submit validation", all_of=("onSubmit", "validate")), 3),
            ),
            issue="Form validation feedback not well implemented",
        ),
        SignalCheck(
            title="Form data handling",
            file_set="source",
            thresholds=(
                at_least(signal("form data", "FormData", "formData"), 5),
                at_least(signal("form reset", "reset(", "resetForm"), 2),
            ),
            issue="Form data handling not well implemented",
        ),
        SignalCheck(
            title="Form testing",
            file_set="tests",
            thresholds=(
                at_least(signal("form tests", "form", "Form"), 3),
                at_least(signal("validation tests", "validation", "validate"), 2),
            ),
            issue="Form testing not well implemented",
        ),
        SignalCheck(
            title="User experience features",
            file_set="source",
            thresholds=(
                at_least(signal("ux features", "autoFocus", "autoComplete", "placeholder"), 3),
                at_least(signal("feedback", "toast", "Toast", "notification"), 1),
            ),
            issue="User experience features not well implemented",
        ),
    ),
)

__all__ = ["PHASE"]
