from backtracking.signature.prompt import MAX_PROMPT_LENGTH, build_prompt, format_value
from backtracking.signature.signature import Signature, SignatureField


def test_basic_layout(qa_signature):
    prompt = build_prompt(qa_signature, {"question": "What is 6*7?"})

    assert prompt == (
        "Follow this exact format for your response:\n"
        "Answer: [your Answer]\n\n"
        "Input Fields:\n- question: Question\n\n"
        "Output Fields:\n- answer: Answer\n\n"
        "Question: What is 6*7?\n"
        "Answer:"
    )


def test_instructions_come_first(qa_signature):
    sig = qa_signature.extend(instructions="Be brief.")
    assert build_prompt(sig, {"question": "q"}).startswith("Instructions: Be brief.\n\n")


def test_missing_input_uses_placeholder(qa_signature):
    assert "Question: [input]" in build_prompt(qa_signature, {})


def test_one_of_is_listed():
    sig = Signature(
        name="verdict",
        input_fields=[SignatureField(name="claim")],
        output_fields=[SignatureField(name="verdict", one_of=["yes", "no"])],
    )
    assert "- verdict: Verdict (one of: yes, no)" in build_prompt(sig, {"claim": "c"})


def test_examples_section(qa_signature):
    prompt = build_prompt(qa_signature, {"question": "q"}, [{"question": "1+1", "answer": "2"}])
    assert "Examples:\n\nExample 1:\nQuestion: 1+1\nAnswer: 2" in prompt


def test_long_prompt_is_truncated(qa_signature):
    prompt = build_prompt(qa_signature, {"question": "x" * 9000})
    assert len(prompt) == MAX_PROMPT_LENGTH + 3
    assert prompt.endswith("...")


def test_prompt_at_limit_is_untouched(qa_signature):
    prompt = build_prompt(qa_signature, {"question": "q"}, max_length=10_000)
    assert not prompt.endswith("...")


def test_format_value():
    assert format_value(True) == "true"
    assert format_value(3) == "3"
    assert format_value({"b": 1, "a": [1, 2]}) == '{"a": [1, 2], "b": 1}'
    assert format_value("text") == "text"
