from explainer.core import (
    AdapterFault,
    AdapterTimeout,
    ExplainerError,
    GenerationExhausted,
    InfrastructureError,
    NarrationFailed,
    PipelineError,
)


def test_generation_exhausted_message_carries_attempts_diagnostic_and_preview():
    error = GenerationExhausted(attempts=3, last_diagnostic="NameError: foo", source_preview="class A(Scene):")

    message = str(error)
    assert message.startswith("Code compilation failed after 3 attempts.")
    assert "Final error: NameError: foo" in message
    assert "Last generated code:\nclass A(Scene):..." in message
    assert error.attempts == 3
    assert error.last_diagnostic == "NameError: foo"


def test_generation_exhausted_without_diagnostic():
    error = GenerationExhausted(attempts=1, last_diagnostic=None, source_preview="")
    assert "Final error: Unknown error" in str(error)


def test_narration_failed_names_step():
    error = NarrationFailed("boom", step_number=4)
    assert error.step_number == 4
    assert isinstance(error, PipelineError)


def test_taxonomy():
    assert issubclass(AdapterTimeout, AdapterFault)
    assert issubclass(AdapterFault, InfrastructureError)
    assert issubclass(InfrastructureError, ExplainerError)
    assert issubclass(PipelineError, ExplainerError)
