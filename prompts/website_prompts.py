# Website Prompt Templates for Static Site Generation

OUTPUT_INSTRUCTIONS = """
**OUTPUT FORMAT:**
- A single JSON object with exactly three string fields: "html", "css", "javascript"
- "html": body content only, no `<!DOCTYPE>`, `<head>` or `<body>` wrappers
- "css": plain stylesheet rules, no `<style>` tag
- "javascript": plain script, no `<script>` tag; it runs after the markup exists
- NO explanations/markdown around the JSON

**REQUIREMENTS:**
- STRICTLY follow ALL user specifications (content, colors, layout, tone)
- Self-contained: no external files, fonts, images or network requests
- Responsive layout with CSS Grid/Flexbox
- Use "" for a field that is not needed
"""

WEBSITE_PROMPT = f"""You are an expert web developer. Generate the HTML, CSS, and JavaScript code for a website based on the following description.
{OUTPUT_INSTRUCTIONS}
**Website Description:** "{{user_prompt}}"

Return the code in a JSON format:

{{{{
  "html": "...",
  "css": "...",
  "javascript": "..."
}}}}
"""


def create_website_prompt(user_prompt: str) -> str:
    """Create the full generation prompt for a user description."""
    return WEBSITE_PROMPT.format(user_prompt=user_prompt)
