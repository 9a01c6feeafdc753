TASKS_TEMPLATE = """
Break this Jira {issue_type} into implementation tasks.

Rules:
Return ONLY valid JSON:
{{
  "tasks": [
    {{ "title": "", "description": "" }}
  ]
}}

Title: {title}
Description: {description}
"""

TESTCASES_TEMPLATE = """
Generate Jira test cases.

Return ONLY JSON:
{{
  "testCases": [
    {{
      "title": "",
      "steps": [{{ "action": "", "expected": "" }}]
    }}
  ]
}}

Title: {title}
"""

CRITERIA_TEMPLATE = "Generate acceptance criteria for Jira Story: {title}"

DESCRIPTION_TEMPLATE = """
Write a professional Jira description for {issue_type}: {title}

Context provided by the reporter:
{description}

Structure the description as a complete user story with these sections, in order:

User Story
As a <persona>, I want <goal>, so that <benefit>.

Persona
Who the user is and what they are trying to achieve.

Goal
What the user needs the system to do.

Benefit
Why it matters to the user and to the business.

Acceptance Criteria
Write the criteria EITHER as Gherkin scenarios (Given / When / Then) OR as a
bullet list. Pick one style and use it for every criterion. Never mix both
styles in the same description.

Follow this example:

User Story
As a project manager, I want to filter the issue list by due date, so that I can
focus on work that is about to slip.

Persona
A project manager who reviews the team backlog every morning.

Goal
Narrow the issue list to issues due within a chosen date range.

Benefit
Less time scanning the backlog and fewer missed deadlines.

Acceptance Criteria
Scenario: Filter issues due this week
  Given the issue list contains issues with different due dates
  When I select the "Due this week" filter
  Then only issues due within the current week are shown

Scenario: Clear the filter
  Given the "Due this week" filter is applied
  When I clear the filter
  Then all issues are shown again
"""

BUG_TEMPLATE = "Summarize this Jira bug clearly: {description}"

TEMPLATES = {
    "tasks": TASKS_TEMPLATE,
    "testcases": TESTCASES_TEMPLATE,
    "criteria": CRITERIA_TEMPLATE,
    "description": DESCRIPTION_TEMPLATE,
    "bug": BUG_TEMPLATE,
}


def build_prompt(title, description, issue_type, action):
    """Render the prompt for an action; unknown actions fall back to the bare title."""
    template = TEMPLATES.get(action)
    if template is None:
        return title
    return template.format(
        title=title,
        description=description or "",
        issue_type=issue_type or "",
    )
