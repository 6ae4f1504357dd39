"""
Prompt builders for the AI data-entry helpers.
Each builder returns the exact text (or content blocks) sent as the single user message.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

PDF_MEDIA_TYPE = "application/pdf"
DESCRIPTION_PREVIEW_CHARS = 60


def domain_lookup_prompt(domain: str) -> str:
    return (
        f'Analyze this email domain: "{domain}"\n\n'
        "Based on the domain name and any knowledge you have, determine:\n"
        "1. Is this likely a church, parish, temple, synagogue, mosque, or other religious organization?\n"
        "2. If yes, what is the probable full name of the organization?\n"
        "3. What denomination or religious tradition (if identifiable from the domain)?\n"
        "4. What city/state or region (if identifiable)?\n\n"
        "Return ONLY a JSON object with these fields:\n"
        "{\n"
        '  "isReligiousOrg": boolean,\n'
        '  "organizationName": string,\n'
        '  "denomination": string,\n'
        '  "location": string,\n'
        '  "confidence": "high" | "medium" | "low"\n'
        "}\n\n"
        "If you cannot determine, set isReligiousOrg to false. Return ONLY JSON, no explanation."
    )


def signup_sheet_prompt(default_ministry: str, ministry_names: Sequence[str]) -> str:
    default_line = f'Default ministry if not identifiable: "{default_ministry}"\n' if default_ministry else ""
    names_line = f"Known ministry names: {', '.join(ministry_names)}\n" if ministry_names else ""
    return (
        "Look at this image of a physical sign-up sheet. Extract all signup entries you can find.\n\n"
        "For each person, extract:\n"
        "- firstName\n- lastName\n- email (if visible)\n- phone (if visible)\n"
        "- ministry (if identifiable from the sheet title or context)\n\n"
        f"{default_line}{names_line}"
        "\nReturn ONLY a JSON object with this exact structure:\n"
        '{"entries": [{"firstName": "", "lastName": "", "email": "", "phone": "", "ministry": ""}]}\n\n'
        "If you cannot read certain fields, leave them as empty strings. Do your best to decipher handwriting."
    )


def format_ministry_list(ministries: Sequence[Mapping[str, Any]]) -> str:
    """Render existing ministries as `- Name (short description...)` lines."""

    lines = []
    for ministry in ministries:
        name = str(ministry.get("name") or "")
        description = str(ministry.get("description") or "")
        suffix = f" ({description[:DESCRIPTION_PREVIEW_CHARS]}...)" if description else ""
        lines.append(f"- {name}{suffix}")
    return "\n".join(lines)


def booklet_enrichment_prompt(ministry_list: str) -> str:
    return (
        "I have a ministry booklet or document from a church/parish. "
        "I also have an existing list of ministries in our database.\n\n"
        f"EXISTING MINISTRIES:\n{ministry_list}\n\n"
        "Please analyze this document and extract enrichment data for each ministry you can identify. "
        "For each ministry:\n"
        '1. Match it to an existing ministry by name (fuzzy matching is OK: "Lectors" matches "Lector Ministry")\n'
        "2. Extract any new information: richer description, meeting times/schedule, location, requirements, "
        "who to contact, mission statement, activities, etc.\n\n"
        "Also identify any ministries in the booklet that are NOT in our existing list.\n\n"
        "CONTENT MODERATION: Ensure all extracted text is appropriate for a public-facing parish website. "
        "Rewrite informal or poorly-worded descriptions into clear, welcoming language. "
        "Omit any inappropriate content.\n\n"
        "Return ONLY a JSON object with this structure:\n"
        "{\n"
        '  "enrichments": [\n'
        "    {\n"
        '      "existingId": "ministry-id or null if new",\n'
        '      "existingName": "matched ministry name or null",\n'
        '      "bookletName": "name as it appears in the booklet",\n'
        '      "description": "enriched description (longer/better than existing)",\n'
        '      "meetingTime": "if mentioned",\n'
        '      "location": "if mentioned",\n'
        '      "requirements": "if mentioned",\n'
        '      "contactName": "if mentioned",\n'
        '      "contactEmail": "if mentioned",\n'
        '      "contactPhone": "if mentioned",\n'
        '      "additionalNotes": "any other useful info"\n'
        "    }\n"
        "  ],\n"
        '  "newMinistries": ["names of ministries in booklet but not in existing list"],\n'
        '  "summary": "brief human-readable summary of what was found"\n'
        "}"
    )


def spreadsheet_enrichment_prompt(ministry_list: str, sample_data: str) -> str:
    return (
        "I have a supplementary spreadsheet (possibly form responses) with additional information about "
        "church/parish ministries. I also have existing ministry records.\n\n"
        f"EXISTING MINISTRIES:\n{ministry_list}\n\n"
        f"SUPPLEMENTARY SPREADSHEET DATA:\n{sample_data}\n\n"
        "Analyze this spreadsheet and:\n"
        "1. Match each row to an existing ministry by name (fuzzy matching OK)\n"
        "2. Identify what new/additional data each row provides beyond what we already have\n"
        "3. Map the columns to useful fields\n\n"
        "CONTENT MODERATION (IMPORTANT):\n"
        "This data may come from raw form responses. Before including any text in the enrichment output:\n"
        "- FILTER OUT casual remarks, jokes, off-topic comments, event logistics, complaints, internal notes, "
        "and anything not suitable for a public-facing ministry description.\n"
        "- FILTER OUT any profanity, inappropriate language, or content that would be offensive in a "
        "church/parish context.\n"
        "- ONLY extract substantive, professional descriptions of what the ministry does, its mission, "
        "activities, meeting details, and contact information.\n"
        "- REWRITE informal or poorly-written descriptions into clear, respectful, welcoming language "
        "appropriate for a parish website.\n"
        "- If a form response contains no usable ministry description (just junk, logistics, or inappropriate "
        "content), set description to null rather than including bad content.\n\n"
        "Return ONLY a JSON object with this structure:\n"
        "{\n"
        '  "enrichments": [\n'
        "    {\n"
        '      "existingId": "ministry-id or null if new",\n'
        '      "existingName": "matched ministry name or null",\n'
        '      "sheetName": "name as it appears in the spreadsheet",\n'
        '      "description": "enriched/updated description if available",\n'
        '      "organizerName": "if available",\n'
        '      "organizerEmail": "if available",\n'
        '      "organizerPhone": "if available",\n'
        '      "meetingTime": "if available",\n'
        '      "location": "if available",\n'
        '      "additionalNotes": "any other useful info from this row"\n'
        "    }\n"
        "  ],\n"
        '  "newMinistries": ["names of ministries in sheet but not in existing list"],\n'
        '  "columnMapping": {"columnName": "whatItMapsTo"},\n'
        '  "summary": "brief human-readable summary of what was found"\n'
        "}"
    )


def file_block(data: str, media_type: str) -> dict[str, Any]:
    """Wrap base64 file data as a content block; PDFs go in a document block."""

    block_type = "document" if media_type == PDF_MEDIA_TYPE else "image"
    return {
        "type": block_type,
        "source": {"type": "base64", "media_type": media_type, "data": data},
    }


def with_file(data: str, media_type: str, prompt: str) -> list[dict[str, Any]]:
    return [file_block(data, media_type), {"type": "text", "text": prompt}]
