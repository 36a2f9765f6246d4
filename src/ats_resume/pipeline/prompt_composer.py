"""Builds the resume generation prompt from a profile and a job description."""

from __future__ import annotations

import re
from string import Template

from ats_resume.models.profile import ProfileRecord

FALLBACK_EMPLOYER = "Cascade Investment"
OPENING_PHRASE = "Senior Software Engineer"
SUMMARY_MIN_CHARS = 700
SUMMARY_MAX_CHARS = 800

RESUME_POLICY = Template("""\
You are a world-class technical resume assistant.

SYSTEM INSTRUCTION: Make the resume align as closely as possible with the Job Description (JD). Proactively REPLACE, REPHRASE, and ADD bullet points under each Experience entry, especially recent and current roles, so the language, skills, and technologies match the JD. Do NOT leave any Experience section or bullet unchanged if it could better reflect keywords, duties, or requirements from the JD. Writing NEW bullets is encouraged where there is relevant experience. Prioritize the roles closest to the desired job.

Your main objectives:
1. Maximize keyword, skill, and responsibility overlap between the resume and the JD. Use the exact technology, tool, process, and methodology names from the JD wherever accurate.
  1a. Keep core skill terms near related action verbs and quantified results to improve semantic ATS scoring.
  1b. Cross-link skills (e.g., "React with TypeScript", "AWS Lambda for automation") to show real project context.
  1c. Focus on the required skills, technologies, and ecosystems from the JD and build realistic, relevant bullets around them.
2. Preserve all original company names, job titles, and periods/dates in the Professional Experience section.
  2a. INDUSTRY ALIGNMENT: Identify the JD's industry (e.g., fintech, healthcare, retail). For each Experience entry, check whether the company could plausibly belong to that industry:
  - If the company is generic or ambiguous (e.g., "LLC", "Inc.", "Solutions", "Tech Corp", or any name that does not clearly indicate another industry), write its bullets and context as if the role were in the JD's industry, using that industry's terminology and typical responsibilities.
  - If the company clearly belongs to another industry (e.g., "State University", "School District", "Hospital System"), do NOT reframe it as the JD's industry. Keep its context consistent with its actual industry and only align skills, technologies, and transferable duties to the JD.
  2b. FALLBACK ROLE WHEN NO COMPANY FITS THE JD INDUSTRY: If every company on the resume is clearly tied to an industry that cannot plausibly be the JD's industry, add exactly one part-time role with company name "$fallback_employer" in an appropriate time period (overlapping or adjacent to existing roles, or in a gap). Place it in the correct chronological position: order all roles by date, most recent first, and insert the $fallback_employer entry where its dates fall, not at the end of the list. Give it a job title and bullets that fit the JD's required skills and industry. Keep it concise (4-6 bullets). Do not add this role if at least one existing company could plausibly be in the JD's industry.
3. In each Experience entry, produce 8-10 bullets per role (one sentence per bullet), each a concise story (challenge, action, result). This is a hard requirement: NEVER fewer than 8 bullets per role. The longest-tenured company gets the most bullets; the others scale with their period length. If the source role has fewer bullets, CREATE additional realistic, JD-aligned bullets.
4. Emphasize the JD's main tech stack in the most recent or relevant roles and distribute secondary JD requirements across earlier positions. Together the roles should cover the full range of JD skills and duties. Include explicit database-related experience.
5. Place the SKILLS section immediately after the SUMMARY and before PROFESSIONAL EXPERIENCE.
6. In the Summary, integrate the most essential skills, stacks, and requirements from the JD. Keep it dense with relevant keywords but natural in tone.
7. In every section (Summary, Skills, Experience), include as many relevant unique keywords and technologies from the JD as possible.
8. SKILLS SECTION: Build an exceptionally rich, dense Skills section. List every technology, tool, framework, library, service, and methodology from BOTH the JD and the candidate's experience.
  8a. Include common ecosystem terms even if the JD omits them (e.g., REST, GraphQL, CI/CD).
  8b. Avoid duplicates but prefer variety (e.g., both "Docker" and "Containerization").
  8c. Order skill groups by the JD's emphasis.
9. Preserve all original quantified metrics and add quantification to new or reworded bullets. At least 75% of Experience bullets should include a number, percentage, range, or scale.
10. VERB VARIETY: No action verb may appear more than twice in the entire document, and never in adjacent bullets within or across jobs. Each bullet should start with a distinct action verb whenever possible.
11. Prefer keywords and phrasing taken directly from the JD where they truthfully reflect the candidate's background.
12. Assign primary JD technologies to the most recent or relevant positions and supporting technologies to earlier roles. Every key JD technology appears at least once.
13. Only include technologies or responsibilities the candidate could reasonably have used given their career path.
14. The resume must read as cohesive, naturally written, and plausible, not artificially optimized.
15. STYLE: no em dashes; use commas, semicolons, "and", or simple hyphens. Prefer non-rounded percentages (e.g., 33%, 47%). Prioritize impact and results over generic duties.
16. BOLD FORMATTING (**double asterisks**):
  BOLD ONLY: technical terms in the Summary and in Experience bullets (languages, frameworks, tools, databases, cloud services), and the category label in the Skills section (e.g. "**Languages:**").
  NEVER BOLD: section headers, job titles, company names, dates, education details, or any individual skill value in the Skills section.
  Skills categories: only the category label may be bold; the skill values after it must never be bold. Correct: "**Frontend:** React, Next.js". Wrong: "Languages: **JavaScript**, **Python**".
  Each **bold** span must start and end on the same line. When in doubt, don't bold.

Here is the base resume:

$base_resume

Here is the target job description:

$job_description

HUMANIZATION RULES:
- Vary phrasing between sections; avoid repeating stock openers such as "Worked on" or "Responsible for".
- Allow small natural stylistic variation (an omitted article here and there, a slight tense shift in long roles).
- Keep a professional but conversational tone, like a senior engineer writing their own resume.
- Include subtle domain context or role-specific detail (e.g., "Collaborated with cross-functional teams in agile sprints to refine UI consistency").
- Keep vocabulary domain-accurate but not mechanical or statistically flat.
- Occasionally use idiomatic phrasing common in human-written tech resumes ("hands-on with", "worked closely with", "played a key role in").

Before outputting, make a final pass to:
- Smooth transitions between bullets within each job.
- Reduce redundancy across jobs; do not repeat identical achievements.
- Make sure the document reads naturally aloud.
- Balance ATS keyword density with human readability in every section.

YEARS OF EXPERIENCE IN SUMMARY: If the candidate has more than 10 years of experience, refer to it in the Summary ONLY as "more than 10 years". Never use the exact number (e.g. do not write 12+, 13+, 15 years).

SUMMARY OPENING: The Summary must always begin with "$opening_phrase" (e.g. "$opening_phrase with more than 10 years...").

SUMMARY LENGTH: The Summary must be between $summary_min and $summary_max characters. This is a hard requirement.

OUTPUT: Return the improved resume as a single JSON object only (no other text, no markdown fences). Use this exact structure. Preserve all company names, job titles, and dates from the base resume. Use **bold** for technical terms in the summary and experience details as described above. Order experience by date, most recent first. Include 8-10 bullets per role in details. If you added a $fallback_employer role, include it in experience with its company, title, dates, and details.

{"title":"<exact job title from JD only, no company>","summary":"<text>","skills":{"<CategoryName>":["skill1","skill2"]},"experience":[{"title":"<job title>","company":"<company name>","location":"<location or empty string>","start_date":"<start>","end_date":"<end>","details":["<bullet>"]}]}""")

# (pattern, replacement) pairs applied when a response was cut off by the
# token budget and the request is reissued with a lower bullet floor.
_BULLET_FLOOR_REWRITES = (
    (re.compile(r"8-10 bullets per role"), "6-8 bullets per role"),
    (re.compile(r"NEVER fewer than 8 bullets per role"), "NEVER fewer than 6 bullets per role"),
)


def render_base_resume(profile: ProfileRecord) -> str:
    """Flatten a profile into the plain-text resume embedded in the prompt."""
    contact = " | ".join(
        v for v in (profile.email, profile.phone, profile.location) if v
    )
    lines = [profile.name, contact, "", "PROFESSIONAL EXPERIENCE"]
    for job in profile.experience:
        line = f"{job.title or 'Role'} at {job.company}"
        if job.location:
            line += f", {job.location}"
        line += f" | {job.start_date} - {job.end_date}"
        lines.append(line)

    lines += ["", "EDUCATION"]
    for edu in profile.education:
        line = f"{edu.degree}, {edu.school} ({edu.start_year or ''}-{edu.end_year or ''})"
        if edu.grade:
            line += f" | {edu.grade}"
        lines.append(line)
    return "\n".join(lines)


def compose_prompt(profile: ProfileRecord, job_description: str) -> str:
    """Interpolate the profile and the verbatim job description into the policy."""
    return RESUME_POLICY.safe_substitute(
        base_resume=render_base_resume(profile),
        job_description=job_description,
        fallback_employer=FALLBACK_EMPLOYER,
        opening_phrase=OPENING_PHRASE,
        summary_min=SUMMARY_MIN_CHARS,
        summary_max=SUMMARY_MAX_CHARS,
    )


def reduce_bullet_floor(prompt: str) -> str:
    """Lower the per-role bullet requirement from 8-10 to 6-8."""
    for pattern, replacement in _BULLET_FLOOR_REWRITES:
        prompt = pattern.sub(replacement, prompt)
    return prompt
