"""
Prompts for the reasoning oracle.

Design principles:
- The engine tracks and gates evidence; the model supplies the medical content.
- Every JSON-output prompt includes an explicit schema and an ONLY-JSON instruction.
- The output language is always passed in explicitly, never inferred from the input.
"""

LANGUAGE_NAMES = {
    "en": "English",
    "zh-TW": "Traditional Chinese (繁體中文)",
}


def language_name(language: str) -> str:
    """Human-readable language name used inside prompts."""
    return LANGUAGE_NAMES.get(language, LANGUAGE_NAMES["en"])


ORACLE_SYSTEM_PROMPT = """
<ROLE>
You are a medical interviewing assistant supporting a structured, adaptive symptom interview.

You are NOT a doctor and you do NOT replace professional care.
Your job: reason carefully over the information the patient has given, keep the interview
focused, and flag dangerous presentations clearly.
</ROLE>

<RULES>
- Answer ONLY in the requested format. When JSON is requested, output ONLY valid JSON:
  no markdown fences, no commentary before or after.
- Never invent symptoms the patient did not report.
- Always respond in the language you are asked to use.
</RULES>
"""


DIAGNOSIS_PROMPT = """
════════════════════════════════════════════════════════
PATIENT PROFILE
════════════════════════════════════════════════════════

Age:                    {age}
Gender:                 {gender}
Primary symptom:        "{primary_symptom}"
Medications:            {medications}
Allergies:              {allergies}
Past medical history:   {past_medical_history}
Family history:         {family_history}

SYMPTOM QUESTIONNAIRE RESPONSES:
{answers}

════════════════════════════════════════════════════════
TASK
════════════════════════════════════════════════════════

Provide the top 3 most likely differential diagnoses with probability estimates.

REQUIREMENTS:
1. Consider the patient's age, gender and symptom pattern
2. Provide realistic probability percentages that sum to at most 100
3. Include a confidence level (high|medium|low) based on the available information
4. Assess the urgency level of each diagnosis
5. Give clear clinical reasoning for each diagnosis
6. Use {language}

Consider common conditions, red-flag conditions that must not be missed, acute versus
chronic possibilities and lifestyle-related factors.

Return ONLY a JSON array with exactly 3 diagnoses:
[
    {{
        "condition": "Name of medical condition",
        "probability": 0-100,
        "confidence": "high|medium|low",
        "reasoning": "Why this diagnosis fits the symptoms",
        "urgencyLevel": "emergency|urgent|routine|self_care"
    }}
]

If this appears to be a medical emergency, say so in urgencyLevel and reasoning.
"""


NEXT_QUESTION_PROMPT = """
════════════════════════════════════════════════════════
PATIENT PROFILE
════════════════════════════════════════════════════════

Age:                    {age}
Gender:                 {gender}
Primary symptom:        "{primary_symptom}"

PREVIOUS ANSWERS:
{answers}

QUESTIONS ALREADY ASKED:
{history}

════════════════════════════════════════════════════════
ADAPTIVE INTERVIEW CONTEXT
════════════════════════════════════════════════════════

Current confidence:     {current_confidence}%
Target confidence:      {target_confidence}%
Questions asked:        {questions_asked}/{max_questions}
Next strategy:          {strategy}
Missing information:    {missing_information}
Red flags detected:     {red_flags}

POSSIBLE DIAGNOSES:
{candidates}

════════════════════════════════════════════════════════
TASK
════════════════════════════════════════════════════════

Determine the SINGLE MOST IMPORTANT next question to ask.

QUESTIONING STRATEGY:
- discriminative: differentiate between the top 2-3 possible diagnoses
- confirmation:   confirm the leading diagnosis
- red_flag_check: rule out emergency conditions
- completeness:   fill in missing critical symptom information

CRITICAL RULES:
- Generate ONLY ONE question, asking for ONLY ONE piece of information
- NEVER repeat a question that was already asked
- responseType "scale" for severity (1-10), "multiple_choice" with options otherwise
- Use {language}

Return ONLY a JSON object:
{{
    "question": {{
        "question": "The single most important next question",
        "questionType": "severity|duration|location|frequency|triggers|associated|medical_history|lifestyle",
        "responseType": "scale|multiple_choice|yes_no|text",
        "options": ["options when multiple_choice"],
        "targetedSymptom": "symptom this question is about"
    }},
    "shouldStop": false,
    "reasoning": "Why you chose this question or decided to stop"
}}

Set "question" to null and "shouldStop" to true only when no further question would
meaningfully change the assessment.
"""


GUIDANCE_PROMPT = """
════════════════════════════════════════════════════════
PATIENT PROFILE
════════════════════════════════════════════════════════

Age:                    {age}
Gender:                 {gender}
Primary symptom:        "{primary_symptom}"

DIFFERENTIAL DIAGNOSES:
{candidates}

════════════════════════════════════════════════════════
TASK
════════════════════════════════════════════════════════

Provide guidance for the patient based on the differential diagnoses.

REQUIREMENTS:
1. Clear, actionable next steps
2. Safe self-care recommendations where appropriate
3. When to seek professional medical care
4. Emergency symptoms that require immediate attention
5. Use {language}
6. Be empathetic but professional

Return ONLY a JSON object:
{{
    "nextSteps": ["specific action item"],
    "selfCareRecommendations": ["safe home remedy"],
    "whenToSeekCare": ["specific situation"],
    "emergencyIndicators": ["red flag symptom"]
}}
"""


FOLLOWUP_PROMPT = """
PATIENT CONTEXT (internal reference only):
- Age: {age}, {gender}
- Primary symptom: "{primary_symptom}"
- Current diagnoses:
{candidates}

USER'S QUESTION: "{question}"

INSTRUCTIONS:
1. Give a helpful, medically informed answer
2. Refer to their specific symptoms and diagnoses when relevant
3. Always say when to seek professional care
4. Be empathetic and supportive while keeping professional boundaries
5. Use {language}

Reply in plain prose. You are an AI assistant and not a substitute for professional care.
"""
