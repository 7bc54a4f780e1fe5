from __future__ import annotations

from atsmatch.schemas.resume import Resume


def build_resume_content(resume: Resume) -> str:
    """Render structured sections back into plain resume text."""
    sections = resume.sections
    parts: list[str] = []

    if sections.summary:
        parts.append(sections.summary.strip())

    if sections.experience:
        entries: list[str] = []
        for exp in sections.experience:
            header = " | ".join(item for item in (exp.position, exp.company) if item)
            dates = " – ".join(item for item in (exp.start_date, exp.end_date) if item)
            body = [f"• {line.strip()}" for line in exp.description]
            entry = "\n".join(item for item in (header, dates, *body) if item)
            if entry:
                entries.append(entry)
        if entries:
            parts.extend(["Experience", "\n\n".join(entries)])

    if sections.skills:
        parts.extend(["Skills", ", ".join(sections.skills)])

    if sections.education:
        lines = []
        for edu in sections.education:
            dates = " - ".join(item for item in (edu.start_date, edu.end_date) if item)
            fields = [edu.institution, edu.degree, edu.field, dates]
            line = ", ".join(item for item in fields if item)
            if line:
                lines.append(line)
        if lines:
            parts.extend(["Education", "\n".join(lines)])

    return "\n\n".join(parts).strip()


def build_resume_text(resume: Resume) -> str:
    """Searchable text for keyword extraction: raw content plus every structured field."""
    sections = resume.sections
    parts: list[str] = [resume.content]
    if sections.summary:
        parts.append(sections.summary)
    if sections.skills:
        parts.append("\n".join(sections.skills))
    if sections.experience:
        for exp in sections.experience:
            parts.extend([exp.position, exp.company, *exp.description])
    if sections.education:
        for edu in sections.education:
            parts.extend([edu.degree, edu.field])
    return "\n".join(part for part in parts if part and part.strip())
