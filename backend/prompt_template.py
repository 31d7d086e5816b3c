"""Versioned prompt template for audit report generation.

AUDIT_TEMPLATE is filled with str.format using named slots only; the target
JSON shape lives in REPORT_SCHEMA and is substituted through the
{report_schema} slot, so neither needs brace escaping.
Bump PROMPT_VERSION whenever the template or schema text changes.
"""

from string import Formatter

from config import PROMPT_BODY_SAMPLE_CHARS
from models import SignalRecord

PROMPT_VERSION = "audit-report/1"

SYSTEM_MESSAGE = """You are a senior business analyst generating professional website audit reports.
Always respond with valid JSON only, no markdown formatting or code blocks.
Do not wrap your response in code blocks or markdown."""

REPORT_SCHEMA = """{
  "id": "unique-id",
  "url": "the website URL",
  "companyName": "extracted or inferred company name",
  "industry": "identified industry/niche",
  "auditDate": "today's date in format Month DD, YYYY",
  "overallScore": number between 40-95,
  "scoreBreakdown": {
    "technical": number 1-10,
    "design": number 1-10,
    "content": number 1-10,
    "seo": number 1-10,
    "conversion": number 1-10,
    "mobile": number 1-10,
    "trust": number 1-10,
    "clarity": number 1-10
  },
  "keyFindings": ["3-5 critical findings with specific evidence"],
  "priorityActions": ["3 immediate actions to take"],
  "companyProfile": {
    "legalName": "company name",
    "founded": "year or 'Not disclosed'",
    "locations": ["addresses found or 'Not disclosed'"],
    "serviceArea": "geographic area served",
    "teamSize": "if mentioned or 'Not disclosed'"
  },
  "businessModel": {
    "revenueStreams": ["identified revenue sources"],
    "pricingStrategy": "Transparent|Hidden|By Quote",
    "targetMarket": "B2B|B2C|Both with evidence",
    "customerSegments": ["identified segments"]
  },
  "valueProposition": {
    "mainPromise": "their main headline or tagline",
    "differentiationClaims": ["what makes them unique"],
    "competitiveAdvantages": ["stated advantages"],
    "gapAnalysis": ["what's missing or unclear"]
  },
  "onlinePresence": {
    "websiteTechnology": "detected platform/technology",
    "socialMedia": [{"platform": "name", "url": "url", "status": "Active|Inactive|Not found"}],
    "businessListings": ["found directories"],
    "recentNews": ["any mentions found"]
  },
  "technicalPerformance": {
    "https": boolean,
    "mobileResponsive": boolean (assume true for modern sites),
    "pageLoadAssessment": "Fast|Moderate|Slow based on content",
    "brokenLinks": ["any found"],
    "browserCompatibility": "Modern|Outdated"
  },
  "siteStructure": {
    "navigationClarity": number 1-10,
    "menuItems": ["actual menu items"],
    "userJourney": "assessment of user flow",
    "contactAccessibility": "how easy to find contact info"
  },
  "seoElements": {
    "pageTitle": "actual title",
    "metaDescription": "actual meta or 'Missing'",
    "h1Tags": ["actual H1s"],
    "altTextUsage": "Present|Sparse|Missing",
    "urlStructure": "Clean|Messy",
    "sitemap": boolean,
    "robotsTxt": boolean,
    "schemaMarkup": boolean,
    "pageSpeedIndicators": ["observations"]
  },
  "homepageAnalysis": {
    "firstImpression": "description of design and messaging",
    "heroSection": "actual hero headline",
    "primaryCTA": "main call-to-action text",
    "valueCommunication": "how quickly visitors understand the business",
    "trustSignals": ["visible trust elements"]
  },
  "aboutPage": {
    "exists": boolean,
    "quality": number 1-10,
    "description": "brief assessment"
  },
  "servicesPage": {
    "exists": boolean,
    "quality": number 1-10,
    "description": "brief assessment",
    "services": ["listed services if found"]
  },
  "contactPage": {
    "phone": "found number or 'Missing'",
    "email": "found email or 'Missing'",
    "contactForm": boolean,
    "liveChat": boolean,
    "address": "found address or 'Not shown'",
    "responseTimePromise": "if stated or 'Not stated'"
  },
  "contentQuality": {
    "writingQuality": "Professional|Adequate|Poor",
    "grammarSpelling": "Clean|Issues noted",
    "contentDepth": "Comprehensive|Surface-level",
    "industryAuthority": "Demonstrated|Lacking",
    "contentFreshness": "assessment",
    "blog": {
      "status": "Active|Inactive|Missing",
      "latestPost": "date or N/A",
      "frequency": "assessment"
    }
  },
  "visualDesign": {
    "designEra": "Modern 2024-25|Dated|Outdated",
    "brandConsistency": "Strong|Weak",
    "colorScheme": "description",
    "typography": "Professional|Basic|Poor",
    "imageryQuality": "High-quality|Stock|Low-quality",
    "whiteSpaceUsage": "Balanced|Cluttered|Sparse",
    "visualHierarchy": "Clear|Confusing"
  },
  "ctaAnalysis": {
    "visibility": number 1-10,
    "clarity": "Clear|Vague",
    "primaryCTAs": ["actual CTA texts found"],
    "placement": "Strategic|Random|Missing"
  },
  "leadGeneration": {
    "contactForms": "description of forms",
    "phoneProminence": "Visible|Hidden",
    "emailSignup": boolean,
    "leadMagnets": ["any offers found"],
    "frictionPoints": ["barriers to conversion"]
  },
  "trustCredibility": {
    "testimonials": {"present": boolean, "count": number},
    "caseStudies": {"present": boolean, "count": number},
    "clientLogos": boolean,
    "awards": ["any shown"],
    "mediasMentions": boolean,
    "professionalAssociations": boolean,
    "guarantees": boolean,
    "securityBadges": boolean,
    "privacyPolicy": boolean,
    "termsOfService": boolean,
    "googleReviews": null or {"rating": number, "count": number},
    "thirdPartyReviews": ["platforms found"]
  },
  "keywordStrategy": {
    "primaryKeywords": ["identified target keywords"],
    "keywordImplementation": "Natural|Over-optimized|Under-optimized",
    "localSEO": "Optimized|Neglected",
    "napConsistency": boolean,
    "locationKeywords": boolean
  },
  "contentMarketing": {
    "blogStatus": "Active|Inactive|Missing",
    "contentTypes": ["types found"],
    "educationalValue": "High|Medium|Low",
    "thoughtLeadership": "Demonstrated|Lacking"
  },
  "marketPosition": {
    "positioningStatement": "how they position themselves",
    "competitiveDifferentiation": "what makes them unique",
    "marketGaps": ["opportunities not addressed"]
  },
  "industryComparison": {
    "websiteSophistication": "Ahead|On Par|Behind",
    "featureCompleteness": ["missing features"],
    "pricePositioning": "Premium|Mid-range|Budget|Unknown"
  },
  "mobileExperience": {
    "issues": ["mobile-specific problems"],
    "touchTargets": "Adequate|Too small",
    "navigation": "Easy|Difficult",
    "pageSpeed": "Fast|Moderate|Slow",
    "ctaVisibility": "Visible|Hidden"
  },
  "highPriorityIssues": [{"description": "issue", "impact": "business impact"}],
  "mediumPriorityIssues": [{"description": "issue", "impact": "impact"}],
  "lowPriorityIssues": [{"description": "issue", "impact": "impact"}],
  "recommendations": [
    {
      "title": "specific actionable title",
      "impact": "High|Medium|Low",
      "effort": "High|Medium|Low",
      "priority": number 1-10,
      "why": "explanation with evidence",
      "how": ["step 1", "step 2", "step 3"],
      "expectedOutcome": "measurable result"
    }
  ],
  "quickWins": [{"title": "opportunity", "expectedLift": "expected result"}],
  "strategicInitiatives": [{"title": "initiative", "expectedLift": "result"}],
  "longTermVision": [{"title": "strategy", "expectedLift": "result"}],
  "competitors": [{"name": "competitor", "url": "url or unknown", "strength": "what they do better"}],
  "competitiveAdvantages": ["areas where this business could outperform"]
}"""

AUDIT_TEMPLATE = """You are a senior business analyst and digital marketing consultant. Analyze this website data and generate a comprehensive professional audit report.

Website URL: {url}
Page Title: {title}
Meta Description: {meta_description}
H1 Tags: {h1_tags}
Hero Text: {hero_text}
Menu Items: {menu_items}
CTA Buttons: {cta_buttons}
Has Contact Form: {has_contact_form}
Has Live Chat: {has_live_chat}
Phone Numbers Found: {phone_numbers}
Emails Found: {emails}
Addresses Found: {addresses}
Social Links: {social_links}
Testimonials Count: {testimonials}
Has About Page: {has_about_page}
Has Services Page: {has_services_page}
Has Blog: {has_blog}
Has Privacy Policy: {has_privacy_policy}
Has Terms of Service: {has_terms_of_service}
Image Count: {image_count}
Has HTTPS: {has_https}

Body Content Sample (first {body_sample_chars} chars):
{body_sample}

Generate a complete audit report with realistic, professional analysis based on this data. Return a JSON object with this exact structure:

{report_schema}

Generate 6-10 detailed recommendations. Be specific and evidence-based. Make scores realistic - most sites score 50-75."""


def template_slots(template: str = AUDIT_TEMPLATE) -> set[str]:
    """Named substitution slots used by `template`."""
    return {field for _, field, _, _ in Formatter().parse(template) if field}


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _joined(values) -> str:
    return ", ".join(values)


def render_audit_prompt(signals: SignalRecord) -> str:
    """Fill AUDIT_TEMPLATE with every field of the signal record."""
    return AUDIT_TEMPLATE.format(
        url=signals.url,
        title=signals.title,
        meta_description=signals.meta_description,
        h1_tags=_joined(signals.h1_tags),
        hero_text=signals.hero_text,
        menu_items=_joined(signals.menu_items),
        cta_buttons=_joined(signals.cta_buttons),
        has_contact_form=_flag(signals.has_contact_form),
        has_live_chat=_flag(signals.has_live_chat),
        phone_numbers=_joined(signals.phone_numbers),
        emails=_joined(signals.emails),
        addresses=_joined(signals.addresses),
        social_links=_joined(link.platform for link in signals.social_links),
        testimonials=signals.testimonials,
        has_about_page=_flag(signals.has_about_page),
        has_services_page=_flag(signals.has_services_page),
        has_blog=_flag(signals.has_blog),
        has_privacy_policy=_flag(signals.has_privacy_policy),
        has_terms_of_service=_flag(signals.has_terms_of_service),
        image_count=signals.image_count,
        has_https=_flag(signals.has_https),
        body_sample_chars=PROMPT_BODY_SAMPLE_CHARS,
        body_sample=signals.body_text[:PROMPT_BODY_SAMPLE_CHARS],
        report_schema=REPORT_SCHEMA,
    )
