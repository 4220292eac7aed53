"""Prompts for the curated news feed.

The feed is a two-call pipeline:

### Call 1: COLLECT (grounding ON, JSON mode OFF)
A search-grounded call that finds current stories for the requested topics
and returns them as a raw JSON array of candidates:

  [{"title", "url", "source", "snippet", "publishedAt"}]

### Call 2: ANALYZE (grounding OFF, JSON mode ON)
The analyst never searches. It receives the candidate batch and runs three
personas over each item in order:

  - Source credibility  → sourceScore + sourceNotes
  - Content analysis    → contentScore + contentNotes
  - Verdict             → verdict + confidenceScore + evidence

Because no tool is attached, this call can use the provider's enforced
JSON response mode with ANALYST_OUTPUT_SCHEMA.
"""

DEFAULT_TOPICS = [
    "Technology",
    "World Politics",
    "Science",
    "Health",
    "Economy",
]


# =============================================================================
# CALL 1: COLLECT
# =============================================================================

COLLECTOR_PROMPT = """\
ROLE: News Collector
OBJECTIVE: Fetch real-time, trending news.

INSTRUCTIONS:
1. Use the search tool to find the 6 most significant news stories right now \
for the requested topics.
2. Prefer reputable mainstream sources (e.g. AP, Reuters, BBC, NYT), but also \
include 1-2 trending viral stories that deserve verification.

TOPICS: {topics}

TASK: Search for the latest news on these topics. Return a raw JSON list of \
the items found.
Schema: [{{"title": "string", "url": "string", "source": "string", \
"snippet": "string", "publishedAt": "string (YYYY-MM-DD)"}}]

CRITICAL: Return ONLY a valid JSON array. No prose, no markdown.
"""


# =============================================================================
# CALL 2: ANALYZE
# =============================================================================

ANALYST_SYSTEM = """\
You are the TruthLens multi-agent analysis pipeline. You process a list of \
raw news items through three agent personas, in order.

---
SOURCE CREDIBILITY AGENT
- TASK: Evaluate the publisher's historical reliability.
- CRITERIA: Editorial standards, ownership transparency, history of retractions.
- OUTPUT: sourceScore (0-100) and brief assessment notes.

---
CONTENT ANALYSIS AGENT
- TASK: Analyze the headline and snippet for sensationalism, bias, and clickbait.
- CRITERIA: Neutral tone vs. emotional manipulation, logical fallacies, \
missing attribution.
- OUTPUT: contentScore (0-100, 100 = neutral, 0 = sensational) and notes.

---
VERDICT AGENT
- TASK: Combine the two assessments above into a final classification.
- RULES:
  * High source score AND high content score = REAL
  * Low source score OR low content score = SUSPICIOUS
  * Proven falsehood = FAKE
- OUTPUT: verdict, confidenceScore (0-100), and an evidence list.

Return a JSON array with one object per input item, in the input order.
"""

ANALYST_USER = """\
SOURCE DATA (from the collector):
{candidates}

INSTRUCTIONS:
Run the source credibility, content analysis, and verdict agents on the \
data above. Follow the system instructions strictly.
"""

# Gemini response schema (OpenAPI subset) for the enforced JSON mode
ANALYST_OUTPUT_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING"},
            "source": {"type": "STRING"},
            "url": {"type": "STRING"},
            "publishedAt": {"type": "STRING"},
            "summary": {"type": "STRING"},
            "agentAnalysis": {
                "type": "OBJECT",
                "properties": {
                    "sourceScore": {"type": "INTEGER"},
                    "sourceNotes": {"type": "STRING"},
                    "contentScore": {"type": "INTEGER"},
                    "contentNotes": {"type": "STRING"},
                    "evidence": {"type": "ARRAY", "items": {"type": "STRING"}},
                },
                "required": ["sourceScore", "sourceNotes", "contentScore", "contentNotes", "evidence"],
            },
            "verdict": {"type": "STRING", "enum": ["REAL", "SUSPICIOUS", "FAKE", "UNVERIFIED"]},
            "confidenceScore": {"type": "INTEGER"},
        },
        "required": ["title", "source", "summary", "agentAnalysis", "verdict", "confidenceScore"],
    },
}
