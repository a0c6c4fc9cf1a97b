"""
JSON Schemas sent to the provider in JSON Schema response mode.
"""

COMPATIBILITY_SCHEMA = {
    "name": "compatibility_score_schema",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "compatibility_score": {
                "type": "integer",
                "description": "Overall compatibility between candidate and job, 0-100."
            },
            "rationale": {
                "type": "string",
                "description": "One sentence explaining the score."
            }
        },
        "required": ["compatibility_score", "rationale"],
        "additionalProperties": False
    }
}
