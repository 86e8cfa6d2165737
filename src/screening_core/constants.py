"""Screening constants shared across the SDK.

These values are referenced by the interpretation functions, the prompt
templates and the response parser.  Thresholds are clinical framing and are
deliberately not read from the environment: changing one is a code change.
"""

# --- Accuracy tests (emotion / pattern) — percent correct, higher is better ---
ACCURACY_STRONG_MIN = 80
ACCURACY_MODERATE_MIN = 60

# --- Reaction test — mean milliseconds of valid trials, lower is better ---
REACTION_QUICK_MAX = 300
REACTION_MODERATE_MAX = 500

# Spread (percentage points) between emotion and pattern accuracy that the
# heuristic analysis reports as inconsistent performance.
INCONSISTENCY_SPREAD = 30

# Numbered headings requested by the report prompt, in order.  The response
# parser splits on exactly this vocabulary.
REPORT_SECTIONS: list[str] = [
    "EXECUTIVE SUMMARY",
    "DETAILED OBSERVATIONS",
    "COGNITIVE AND EMOTIONAL ASSESSMENT",
    "RED FLAGS AND RISK INDICATORS",
    "RECOMMENDATIONS",
    "CLINICAL DISCLAIMER",
]

# Category label attached to every parsed observation line.
OBSERVATION_CATEGORY = "Clinical Observation"

# System role sent with every completion request.
REPORT_SYSTEM_PROMPT = (
    "You are a clinical expert in ASD assessment. Generate a professional "
    "clinical report based on the provided screening data. Focus on "
    "observations, patterns, and evidence-based recommendations."
)
ANALYSIS_SYSTEM_PROMPT = (
    "You are a clinical expert in ASD assessment. Review the screening "
    "session data you are given and respond only with a JSON object."
)

# Model identifier reported when content came from the local fallback.
FALLBACK_MODEL = "deterministic-fallback"
