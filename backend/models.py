"""Data models and types used across the backend.

SignalRecord is the scraper's output and is frozen once built.
The report TypedDicts describe the JSON contract the AI service returns;
keys are camelCase because the report is passed to clients as-is.
"""

from typing import Literal, Optional, TypedDict

from pydantic import BaseModel, ConfigDict


class SocialLink(BaseModel):
    """First link found on the page for one social platform."""

    model_config = ConfigDict(frozen=True)

    platform: str
    url: str


class SignalRecord(BaseModel):
    """Structured output from the homepage scraper."""

    model_config = ConfigDict(frozen=True)

    url: str
    title: str = ""
    meta_description: str = ""
    h1_tags: tuple[str, ...] = ()
    hero_text: str = ""
    menu_items: tuple[str, ...] = ()
    cta_buttons: tuple[str, ...] = ()
    has_contact_form: bool = False
    has_live_chat: bool = False
    phone_numbers: tuple[str, ...] = ()
    emails: tuple[str, ...] = ()
    addresses: tuple[str, ...] = ()
    social_links: tuple[SocialLink, ...] = ()
    testimonials: int = 0
    has_about_page: bool = False
    has_services_page: bool = False
    has_blog: bool = False
    has_privacy_policy: bool = False
    has_terms_of_service: bool = False
    body_text: str = ""
    image_count: int = 0
    has_https: bool = False


Level = Literal["High", "Medium", "Low"]


class ScoreBreakdown(TypedDict):
    technical: float
    design: float
    content: float
    seo: float
    conversion: float
    mobile: float
    trust: float
    clarity: float


class CompanyProfile(TypedDict):
    legalName: str
    founded: str
    locations: list[str]
    serviceArea: str
    teamSize: str


class BusinessModel(TypedDict):
    revenueStreams: list[str]
    pricingStrategy: str
    targetMarket: str
    customerSegments: list[str]


class ValueProposition(TypedDict):
    mainPromise: str
    differentiationClaims: list[str]
    competitiveAdvantages: list[str]
    gapAnalysis: list[str]


class SocialMediaEntry(TypedDict):
    platform: str
    url: str
    status: str


class OnlinePresence(TypedDict):
    websiteTechnology: str
    socialMedia: list[SocialMediaEntry]
    businessListings: list[str]
    recentNews: list[str]


class TechnicalPerformance(TypedDict):
    https: bool
    mobileResponsive: bool
    pageLoadAssessment: str
    brokenLinks: list[str]
    browserCompatibility: str


class SiteStructure(TypedDict):
    navigationClarity: float
    menuItems: list[str]
    userJourney: str
    contactAccessibility: str


class SEOElements(TypedDict):
    pageTitle: str
    metaDescription: str
    h1Tags: list[str]
    altTextUsage: str
    urlStructure: str
    sitemap: bool
    robotsTxt: bool
    schemaMarkup: bool
    pageSpeedIndicators: list[str]


class HomepageAnalysis(TypedDict):
    firstImpression: str
    heroSection: str
    primaryCTA: str
    valueCommunication: str
    trustSignals: list[str]


class PageReview(TypedDict):
    exists: bool
    quality: float
    description: str


class ServicesPageReview(PageReview):
    services: list[str]


class ContactPage(TypedDict):
    phone: str
    email: str
    contactForm: bool
    liveChat: bool
    address: str
    responseTimePromise: str


class BlogStatus(TypedDict):
    status: str
    latestPost: str
    frequency: str


class ContentQuality(TypedDict):
    writingQuality: str
    grammarSpelling: str
    contentDepth: str
    industryAuthority: str
    contentFreshness: str
    blog: BlogStatus


class VisualDesign(TypedDict):
    designEra: str
    brandConsistency: str
    colorScheme: str
    typography: str
    imageryQuality: str
    whiteSpaceUsage: str
    visualHierarchy: str


class CTAAnalysis(TypedDict):
    visibility: float
    clarity: str
    primaryCTAs: list[str]
    placement: str


class LeadGeneration(TypedDict):
    contactForms: str
    phoneProminence: str
    emailSignup: bool
    leadMagnets: list[str]
    frictionPoints: list[str]


class PresenceCount(TypedDict):
    present: bool
    count: int


class ReviewRating(TypedDict):
    rating: float
    count: int


class TrustCredibility(TypedDict):
    testimonials: PresenceCount
    caseStudies: PresenceCount
    clientLogos: bool
    awards: list[str]
    mediasMentions: bool
    professionalAssociations: bool
    guarantees: bool
    securityBadges: bool
    privacyPolicy: bool
    termsOfService: bool
    googleReviews: Optional[ReviewRating]
    thirdPartyReviews: list[str]


class KeywordStrategy(TypedDict):
    primaryKeywords: list[str]
    keywordImplementation: str
    localSEO: str
    napConsistency: bool
    locationKeywords: bool


class ContentMarketing(TypedDict):
    blogStatus: str
    contentTypes: list[str]
    educationalValue: str
    thoughtLeadership: str


class MarketPosition(TypedDict):
    positioningStatement: str
    competitiveDifferentiation: str
    marketGaps: list[str]


class IndustryComparison(TypedDict):
    websiteSophistication: str
    featureCompleteness: list[str]
    pricePositioning: str


class MobileExperience(TypedDict):
    issues: list[str]
    touchTargets: str
    navigation: str
    pageSpeed: str
    ctaVisibility: str


class Issue(TypedDict):
    description: str
    impact: str


class Recommendation(TypedDict):
    title: str
    impact: Level
    effort: Level
    priority: int
    why: str
    how: list[str]
    expectedOutcome: str


class GrowthOpportunity(TypedDict):
    title: str
    expectedLift: str


class Competitor(TypedDict):
    name: str
    url: str
    strength: str


class AuditReport(TypedDict):
    """Structured JSON returned by the AI service."""

    id: str
    url: str
    companyName: str
    industry: str
    auditDate: str
    overallScore: float
    scoreBreakdown: ScoreBreakdown
    keyFindings: list[str]
    priorityActions: list[str]
    companyProfile: CompanyProfile
    businessModel: BusinessModel
    valueProposition: ValueProposition
    onlinePresence: OnlinePresence
    technicalPerformance: TechnicalPerformance
    siteStructure: SiteStructure
    seoElements: SEOElements
    homepageAnalysis: HomepageAnalysis
    aboutPage: PageReview
    servicesPage: ServicesPageReview
    contactPage: ContactPage
    contentQuality: ContentQuality
    visualDesign: VisualDesign
    ctaAnalysis: CTAAnalysis
    leadGeneration: LeadGeneration
    trustCredibility: TrustCredibility
    keywordStrategy: KeywordStrategy
    contentMarketing: ContentMarketing
    marketPosition: MarketPosition
    industryComparison: IndustryComparison
    mobileExperience: MobileExperience
    highPriorityIssues: list[Issue]
    mediumPriorityIssues: list[Issue]
    lowPriorityIssues: list[Issue]
    recommendations: list[Recommendation]
    quickWins: list[GrowthOpportunity]
    strategicInitiatives: list[GrowthOpportunity]
    longTermVision: list[GrowthOpportunity]
    competitors: list[Competitor]
    competitiveAdvantages: list[str]
