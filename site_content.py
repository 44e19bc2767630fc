# site_content.py
from typing import Dict, List, Optional

COMPANY_NAME = "OGS Solution"
TAGLINE = "Making LLC formation simple, affordable, and transparent for entrepreneurs nationwide."

CONTACT_INFO: Dict[str, str] = {
    "email": "support@ogssolution.com",
    "phone": "+1 (555) 123-4567",
    "hours": "24/7 Support Available",
}

# ====== States ======
STATE_CODE_TO_NAME: Dict[str, str] = {
    "AL":"Alabama","AK":"Alaska","AZ":"Arizona","AR":"Arkansas","CA":"California","CO":"Colorado",
    "CT":"Connecticut","DE":"Delaware","FL":"Florida","GA":"Georgia","HI":"Hawaii","ID":"Idaho",
    "IL":"Illinois","IN":"Indiana","IA":"Iowa","KS":"Kansas","KY":"Kentucky","LA":"Louisiana",
    "ME":"Maine","MD":"Maryland","MA":"Massachusetts","MI":"Michigan","MN":"Minnesota",
    "MS":"Mississippi","MO":"Missouri","MT":"Montana","NE":"Nebraska","NV":"Nevada",
    "NH":"New Hampshire","NJ":"New Jersey","NM":"New Mexico","NY":"New York",
    "NC":"North Carolina","ND":"North Dakota","OH":"Ohio","OK":"Oklahoma","OR":"Oregon",
    "PA":"Pennsylvania","RI":"Rhode Island","SC":"South Carolina","SD":"South Dakota",
    "TN":"Tennessee","TX":"Texas","UT":"Utah","VT":"Vermont","VA":"Virginia",
    "WA":"Washington","WV":"West Virginia","WI":"Wisconsin","WY":"Wyoming","DC":"Washington, DC"
}

US_STATES: List[Dict[str, str]] = sorted(
    ({"code": code, "name": name} for code, name in STATE_CODE_TO_NAME.items()),
    key=lambda s: s["name"],
)


def state_name(code: Optional[str]) -> Optional[str]:
    if not code:
        return None
    return STATE_CODE_TO_NAME.get(code.strip().upper())


# ====== Home page ======
BENEFITS = [
    {
        "title": "Fast Processing",
        "description": "Get your LLC formed in as little as 1-2 business days with our expedited service.",
    },
    {
        "title": "Affordable Pricing",
        "description": "Transparent pricing starting at just $99. No hidden fees or surprises.",
    },
    {
        "title": "Secure & Reliable",
        "description": "Bank-level security and 100% satisfaction guarantee for peace of mind.",
    },
    {
        "title": "Expert Support",
        "description": "24/7 customer support from LLC formation specialists ready to help.",
    },
]

TESTIMONIALS = [
    {
        "name": "Sarah Johnson",
        "role": "E-commerce Founder",
        "content": "OGS Solution made forming my LLC incredibly easy. The process was straightforward and completed in just 3 days!",
        "rating": 5,
    },
    {
        "name": "Michael Chen",
        "role": "Consultant",
        "content": "Best decision for my business. The Epic package included everything I needed, and support was outstanding.",
        "rating": 5,
    },
    {
        "name": "Emily Rodriguez",
        "role": "Real Estate Investor",
        "content": "Professional, efficient, and affordable. I've recommended OGS Solution to all my business partners.",
        "rating": 5,
    },
]

PROCESS_STEPS = [
    {
        "number": "01",
        "title": "Choose Your State",
        "description": "Select the state where you want to form your LLC using our interactive tool.",
    },
    {
        "number": "02",
        "title": "Select a Package",
        "description": "Pick the service package that best fits your business needs and budget.",
    },
    {
        "number": "03",
        "title": "Complete the Form",
        "description": "Fill out our simple step-by-step form with your business information.",
    },
    {
        "number": "04",
        "title": "We Handle Everything",
        "description": "Sit back and relax while we file your LLC and handle all the paperwork.",
    },
]

FAQS = [
    {
        "question": "What is an LLC?",
        "answer": "A Limited Liability Company (LLC) is a business structure that combines the flexibility of a partnership with the liability protection of a corporation. It protects your personal assets from business debts and lawsuits.",
    },
    {
        "question": "How long does it take to form an LLC?",
        "answer": "Processing times vary by package: Basic (5-7 business days), Ultimate (3-5 business days), and Epic (1-2 business days). These times are in addition to state processing times, which vary by location.",
    },
    {
        "question": "Which state should I form my LLC in?",
        "answer": "Most businesses should form their LLC in the state where they primarily operate. However, Delaware, Wyoming, and Nevada are popular choices for their business-friendly laws. Our AI assistant can help you choose the right state for your needs.",
    },
    {
        "question": "Do I need an EIN for my LLC?",
        "answer": "An EIN (Employer Identification Number) is required if you have employees, multiple members, or want to open a business bank account. Our Ultimate and Epic packages include EIN registration.",
    },
    {
        "question": "What is a registered agent?",
        "answer": "A registered agent is a person or company designated to receive legal documents on behalf of your LLC. Every LLC must have a registered agent in the state where it's formed. Our Ultimate and Epic packages include 1 year of registered agent service.",
    },
    {
        "question": "What are the ongoing requirements for an LLC?",
        "answer": "LLCs typically need to file annual reports, pay annual fees, and maintain good standing with the state. Requirements vary by state. Our Epic package includes compliance alerts to help you stay on track.",
    },
    {
        "question": "Can I form an LLC if I'm not a U.S. citizen?",
        "answer": "Yes! Non-U.S. citizens and residents can form an LLC in any state. You don't need to be a U.S. citizen or have a Social Security Number to start an LLC.",
    },
    {
        "question": "What's included in your packages?",
        "answer": "Basic includes essential LLC registration and documents. Ultimate adds EIN registration and registered agent service. Epic includes everything plus bank account setup assistance and priority support. All packages include expert support and filing services.",
    },
    {
        "question": "Is there a money-back guarantee?",
        "answer": "Yes! We offer a 100% satisfaction guarantee. If you're not completely satisfied with our service, contact us within 60 days for a full refund (excluding state filing fees).",
    },
    {
        "question": "How do I contact support?",
        "answer": "Our support team is available 24/7 via email (support@ogssolution.com), phone (+1 (555) 123-4567), or WhatsApp. You can also chat with our AI assistant anytime for instant answers.",
    },
]

# ====== Seed packages (memory backend) ======
SEED_PACKAGES = [
    {
        "name": "Basic",
        "price": 99,
        "description": "Essential LLC registration and document filing",
        "features": [
            "LLC name availability search",
            "Articles of Organization filing",
            "Digital copies of formation documents",
            "Standard processing (5-7 business days)",
            "Email support",
        ],
        "is_active": True,
    },
    {
        "name": "Ultimate",
        "price": 299,
        "description": "Everything in Basic plus EIN and registered agent service",
        "features": [
            "Everything in Basic",
            "EIN registration",
            "1 year of registered agent service",
            "Operating agreement template",
            "Faster processing (3-5 business days)",
        ],
        "is_active": True,
    },
    {
        "name": "Epic",
        "price": 499,
        "description": "Complete business setup with priority support",
        "features": [
            "Everything in Ultimate",
            "Business bank account setup assistance",
            "Compliance alerts",
            "Expedited processing (1-2 business days)",
            "Priority 24/7 support",
        ],
        "is_active": True,
    },
]
