from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OutputFormatPreset:
    name: str
    width: int
    height: int
    aspect_ratio: str
    description: str
    platform: str | None = None


# Ad sizes, keyed by slug.
OUTPUT_FORMAT_PRESETS: dict[str, OutputFormatPreset] = {
    "instagram_square": OutputFormatPreset("Instagram Square", 1080, 1080, "1:1", "Instagram feed post", "meta"),
    "instagram_portrait": OutputFormatPreset("Instagram Portrait", 1080, 1350, "4:5", "Instagram feed portrait", "meta"),
    "instagram_story": OutputFormatPreset("Instagram Story", 1080, 1920, "9:16", "Instagram Stories & Reels", "meta"),
    "facebook_feed": OutputFormatPreset("Facebook Feed", 1200, 630, "1.91:1", "Facebook feed post", "meta"),
    "facebook_square": OutputFormatPreset("Facebook Square", 1080, 1080, "1:1", "Facebook square post", "meta"),
    "facebook_story": OutputFormatPreset("Facebook Story", 1080, 1920, "9:16", "Facebook Stories", "meta"),
    "tiktok_video": OutputFormatPreset("TikTok Video", 1080, 1920, "9:16", "TikTok vertical video", "tiktok"),
    "google_leaderboard": OutputFormatPreset("Leaderboard", 728, 90, "8.09:1", "Google Display leaderboard", "google"),
    "google_medium_rectangle": OutputFormatPreset(
        "Medium Rectangle", 300, 250, "1.2:1", "Google Display medium rectangle", "google"
    ),
    "google_large_rectangle": OutputFormatPreset(
        "Large Rectangle", 336, 280, "1.2:1", "Google Display large rectangle", "google"
    ),
    "google_skyscraper": OutputFormatPreset("Wide Skyscraper", 160, 600, "0.27:1", "Google Display wide skyscraper", "google"),
    "google_half_page": OutputFormatPreset("Half Page", 300, 600, "0.5:1", "Google Display half page", "google"),
    "linkedin_feed": OutputFormatPreset("LinkedIn Feed", 1200, 627, "1.91:1", "LinkedIn feed post", "linkedin"),
    "linkedin_square": OutputFormatPreset("LinkedIn Square", 1080, 1080, "1:1", "LinkedIn square post", "linkedin"),
    "pinterest_standard": OutputFormatPreset("Pinterest Standard", 1000, 1500, "2:3", "Pinterest standard pin", "pinterest"),
    "pinterest_square": OutputFormatPreset("Pinterest Square", 1080, 1080, "1:1", "Pinterest square pin", "pinterest"),
    "twitter_feed": OutputFormatPreset("Twitter Feed", 1200, 675, "16:9", "Twitter feed post", "programmatic"),
    "twitter_square": OutputFormatPreset("Twitter Square", 1080, 1080, "1:1", "Twitter square post", "programmatic"),
    "landscape_hd": OutputFormatPreset("Landscape HD", 1920, 1080, "16:9", "Standard HD landscape"),
    "portrait_hd": OutputFormatPreset("Portrait HD", 1080, 1920, "9:16", "Standard HD portrait"),
    "square_hd": OutputFormatPreset("Square HD", 1080, 1080, "1:1", "Standard HD square"),
}


@dataclass(frozen=True)
class VideoAspectRatioPreset:
    name: str
    ratio: str
    description: str
    platforms: tuple[str, ...]


VIDEO_ASPECT_RATIOS: dict[str, VideoAspectRatioPreset] = {
    "landscape": VideoAspectRatioPreset("Landscape", "16:9", "Standard landscape video", ("google", "linkedin", "programmatic")),
    "portrait": VideoAspectRatioPreset("Vertical", "9:16", "Vertical mobile video", ("meta", "tiktok")),
    "square": VideoAspectRatioPreset("Square", "1:1", "Square video for feeds", ("meta", "linkedin")),
    "portrait_4_5": VideoAspectRatioPreset("Portrait 4:5", "4:5", "Portrait for Instagram feed", ("meta",)),
}


@dataclass(frozen=True)
class StylePresetInfo:
    name: str
    description: str
    best_for: tuple[str, ...]
    example: str


STYLE_PRESETS: dict[str, StylePresetInfo] = {
    "minimal": StylePresetInfo(
        "Minimal",
        "Clean, simple, professional",
        ("Product photography", "Hero shots", "E-commerce", "Tech products"),
        "White background, soft lighting, clean composition",
    ),
    "bold": StylePresetInfo(
        "Bold",
        "High contrast, vibrant, eye-catching",
        ("Sales campaigns", "Launch promotions", "Youth marketing", "Fashion"),
        "Dramatic lighting, saturated colors, dynamic angles",
    ),
    "lifestyle": StylePresetInfo(
        "Lifestyle",
        "Natural, authentic, relatable",
        ("Brand building", "Social media", "Testimonials", "Community"),
        "Natural lighting, real settings, genuine moments",
    ),
    "promotional": StylePresetInfo(
        "Promotional",
        "Professional, polished, commercial",
        ("Advertising", "Campaigns", "Performance marketing", "Sales"),
        "Studio quality, commercial polish, conversion-focused",
    ),
}


@dataclass(frozen=True)
class ContentTypeInfo:
    name: str
    description: str
    best_for: tuple[str, ...]
    requires_talent: bool
    requires_product: bool
    recommended_duration: str | None = None


IMAGE_TYPES: dict[str, ContentTypeInfo] = {
    # Product is optional so brand-only hero shots are possible.
    "hero_shot": ContentTypeInfo(
        "Hero Shot",
        "Product as the hero with professional studio look",
        ("Landing pages", "Product launches", "Feature highlights", "E-commerce"),
        requires_talent=False,
        requires_product=False,
    ),
    "lifestyle": ContentTypeInfo(
        "Lifestyle",
        "Product in real-world use with authentic context",
        ("Social media", "Brand storytelling", "Engagement", "Community building"),
        requires_talent=True,
        requires_product=True,
    ),
    "product_only": ContentTypeInfo(
        "Product Only",
        "Isolated product shot on clean background",
        ("E-commerce", "Product catalogs", "Comparison ads", "Feature callouts"),
        requires_talent=False,
        requires_product=True,
    ),
    "ugc_style": ContentTypeInfo(
        "UGC Style",
        "User-generated content aesthetic for authenticity",
        ("Social proof", "TikTok", "Instagram", "Influencer-style content"),
        requires_talent=True,
        requires_product=True,
    ),
}

VIDEO_TYPES: dict[str, ContentTypeInfo] = {
    "ugc": ContentTypeInfo(
        "UGC",
        "User-generated content style for authenticity",
        ("Social proof", "TikTok", "Reels", "Influencer campaigns"),
        requires_talent=True,
        requires_product=True,
        recommended_duration="6-15 seconds",
    ),
    "product_demo": ContentTypeInfo(
        "Product Demo",
        "Clear demonstration of product features and benefits",
        ("Product launches", "Feature highlights", "How-to content", "E-commerce"),
        requires_talent=False,
        requires_product=True,
        recommended_duration="15-30 seconds",
    ),
    "testimonial": ContentTypeInfo(
        "Testimonial",
        "Customer testimonial sharing their experience",
        ("Trust building", "Social proof", "Case studies", "Conversion"),
        requires_talent=True,
        requires_product=False,
        recommended_duration="15-30 seconds",
    ),
    "dynamic": ContentTypeInfo(
        "Dynamic",
        "Fast-paced energetic promotional content",
        ("Performance ads", "Sales campaigns", "Launch promotions", "Limited offers"),
        requires_talent=False,
        requires_product=True,
        recommended_duration="6-15 seconds",
    ),
}


@dataclass(frozen=True)
class PlatformRecommendation:
    platform: str
    preferred_formats: tuple[str, ...]
    preferred_styles: tuple[str, ...]
    preferred_image_types: tuple[str, ...]
    preferred_video_types: tuple[str, ...]
    notes: str = field(default="")


PLATFORM_RECOMMENDATIONS: list[PlatformRecommendation] = [
    PlatformRecommendation(
        "meta",
        ("instagram_square", "instagram_story", "facebook_feed"),
        ("lifestyle", "minimal"),
        ("lifestyle", "ugc_style"),
        ("ugc", "dynamic"),
        "Meta platforms favor authentic, social content",
    ),
    PlatformRecommendation(
        "tiktok",
        ("tiktok_video",),
        ("lifestyle", "bold"),
        ("ugc_style", "lifestyle"),
        ("ugc", "dynamic"),
        "TikTok requires vertical video with UGC feel",
    ),
    PlatformRecommendation(
        "google",
        ("google_medium_rectangle", "google_leaderboard"),
        ("promotional", "minimal"),
        ("hero_shot", "product_only"),
        ("product_demo", "dynamic"),
        "Google Display works best with clear product focus",
    ),
    PlatformRecommendation(
        "linkedin",
        ("linkedin_feed", "linkedin_square"),
        ("minimal", "promotional"),
        ("hero_shot", "lifestyle"),
        ("testimonial", "product_demo"),
        "LinkedIn favors professional, business-focused content",
    ),
    PlatformRecommendation(
        "pinterest",
        ("pinterest_standard", "pinterest_square"),
        ("lifestyle", "minimal"),
        ("lifestyle", "hero_shot"),
        ("product_demo", "dynamic"),
        "Pinterest works best with vertical, inspirational content",
    ),
]


def get_recommended_formats(platform: str) -> list[OutputFormatPreset]:
    # Platform-neutral presets are recommended everywhere.
    return [p for p in OUTPUT_FORMAT_PRESETS.values() if p.platform == platform or p.platform is None]


def get_output_format_preset(name: str) -> OutputFormatPreset | None:
    return OUTPUT_FORMAT_PRESETS.get(name)


def get_platform_recommendation(platform: str) -> PlatformRecommendation | None:
    return next((rec for rec in PLATFORM_RECOMMENDATIONS if rec.platform == platform), None)


def get_formats_by_aspect_ratio(aspect_ratio: str) -> list[OutputFormatPreset]:
    return [p for p in OUTPUT_FORMAT_PRESETS.values() if p.aspect_ratio == aspect_ratio]


def _content_type(kind: str) -> ContentTypeInfo | None:
    return IMAGE_TYPES.get(kind) or VIDEO_TYPES.get(kind)


def requires_talent(kind: str) -> bool:
    info = _content_type(kind)
    return bool(info and info.requires_talent)


def requires_product(kind: str) -> bool:
    info = _content_type(kind)
    return bool(info and info.requires_product)
