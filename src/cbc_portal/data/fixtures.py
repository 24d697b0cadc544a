# src/cbc_portal/data/fixtures.py
"""Seed rows for the in-memory fixture store.

These rows stand in for the hosted tables whenever no backend is
configured, and double as the degraded fallback when a remote read fails.
Rows are plain JSON-shaped dicts exactly as the table API would return them.
"""

from __future__ import annotations

import copy
from typing import Any, Final

DEMO_USER_ID: Final[str] = "mock-user-id"
DEMO_EMAIL: Final[str] = "demo@ur.ac.rw"

MEMBERS: Final[list[dict[str, Any]]] = [
    {
        "id": DEMO_USER_ID,
        "email": DEMO_EMAIL,
        "full_name": "Demo Admin",
        "student_id": "220012345",
        "year_of_study": "3",
        "department": "cs",
        "bio": "Passionate about AI and building innovative solutions for Rwanda.",
        "avatar_url": None,
        "role": "admin",
        "status": "approved",
        "joined_at": "2026-01-15T10:00:00+02:00",
        "created_at": "2026-01-15T10:00:00+02:00",
    },
    {
        "id": "1",
        "email": "kaio@ur.ac.rw",
        "full_name": "Kaio Mugisha",
        "student_id": "220001234",
        "year_of_study": "4",
        "department": "cs",
        "bio": "Passionate about AI",
        "avatar_url": None,
        "role": "admin",
        "status": "approved",
        "joined_at": "2025-09-01T10:00:00+02:00",
        "created_at": "2025-09-01T10:00:00+02:00",
    },
    {
        "id": "2",
        "email": "sandrine@ur.ac.rw",
        "full_name": "Sandrine Niyonzima",
        "student_id": "220001235",
        "year_of_study": "3",
        "department": "it",
        "bio": "Building the future",
        "avatar_url": None,
        "role": "lead",
        "status": "approved",
        "joined_at": "2025-09-15T10:00:00+02:00",
        "created_at": "2025-09-15T10:00:00+02:00",
    },
    {
        "id": "3",
        "email": "jean@ur.ac.rw",
        "full_name": "Jean Baptiste K.",
        "student_id": "220001236",
        "year_of_study": "4",
        "department": "cs",
        "bio": None,
        "avatar_url": None,
        "role": "member",
        "status": "pending",
        "joined_at": "2026-02-10T10:00:00+02:00",
        "created_at": "2026-02-10T10:00:00+02:00",
    },
    {
        "id": "4",
        "email": "grace@ur.ac.rw",
        "full_name": "Grace Uwimana",
        "student_id": "220001237",
        "year_of_study": "2",
        "department": "business",
        "bio": "Interested in AI for business",
        "avatar_url": None,
        "role": "member",
        "status": "pending",
        "joined_at": "2026-02-11T10:00:00+02:00",
        "created_at": "2026-02-11T10:00:00+02:00",
    },
    {
        "id": "5",
        "email": "patrick@ur.ac.rw",
        "full_name": "Patrick Habimana",
        "student_id": "220001238",
        "year_of_study": "3",
        "department": "ee",
        "bio": None,
        "avatar_url": None,
        "role": "member",
        "status": "approved",
        "joined_at": "2025-10-01T10:00:00+02:00",
        "created_at": "2025-10-01T10:00:00+02:00",
    },
]

EVENTS: Final[list[dict[str, Any]]] = [
    {
        "id": "1",
        "title": "Introduction to Claude AI",
        "description": "Learn the fundamentals of Claude AI and discover what makes it unique. "
        "Perfect for beginners.",
        "event_type": "workshop",
        "date": "2026-02-16T14:00:00+02:00",
        "end_date": "2026-02-16T17:00:00+02:00",
        "location": "CST Building, Room 201",
        "max_attendees": 50,
        "image_url": None,
        "is_published": True,
        "created_at": "2026-01-15T10:00:00+02:00",
    },
    {
        "id": "2",
        "title": "Prompt Engineering Masterclass",
        "description": "Deep dive into advanced prompting techniques to get the best results "
        "from Claude.",
        "event_type": "workshop",
        "date": "2026-02-23T14:00:00+02:00",
        "end_date": "2026-02-23T17:00:00+02:00",
        "location": "CST Building, Room 201",
        "max_attendees": 40,
        "image_url": None,
        "is_published": True,
        "created_at": "2026-01-15T10:00:00+02:00",
    },
    {
        "id": "3",
        "title": "CBC Weekly Meetup #3",
        "description": "Join us for our weekly gathering to share progress, get feedback, "
        "and connect with fellow builders.",
        "event_type": "meetup",
        "date": "2026-03-16T14:00:00+02:00",
        "end_date": "2026-03-16T16:00:00+02:00",
        "location": "CST Building, Room 201",
        "max_attendees": 100,
        "image_url": None,
        "is_published": True,
        "created_at": "2026-01-15T10:00:00+02:00",
    },
    {
        "id": "4",
        "title": "Build for Rwanda Hackathon",
        "description": "Our flagship 24-hour hackathon where teams build AI solutions for "
        "real Rwandan challenges.",
        "event_type": "hackathon",
        "date": "2026-04-13T09:00:00+02:00",
        "end_date": "2026-04-13T21:00:00+02:00",
        "location": "University Main Hall",
        "max_attendees": 200,
        "image_url": None,
        "is_published": True,
        "created_at": "2026-01-15T10:00:00+02:00",
    },
    {
        "id": "5",
        "title": "Project Showcase Demo Day",
        "description": "Celebrate our achievements! Members present their AI projects to the "
        "university community.",
        "event_type": "demo_day",
        "date": "2026-04-20T15:00:00+02:00",
        "end_date": "2026-04-20T18:00:00+02:00",
        "location": "University Auditorium",
        "max_attendees": 300,
        "image_url": None,
        "is_published": True,
        "created_at": "2026-01-15T10:00:00+02:00",
    },
    {
        "id": "6",
        "title": "Club Kickoff Event",
        "description": "The official launch of Claude Builder Club with tabling and "
        "introductory demonstrations.",
        "event_type": "meetup",
        "date": "2026-02-09T10:00:00+02:00",
        "end_date": "2026-02-09T16:00:00+02:00",
        "location": "Campus Main Square",
        "max_attendees": None,
        "image_url": None,
        "is_published": True,
        "created_at": "2026-01-15T10:00:00+02:00",
    },
    {
        "id": "7",
        "title": "Leads Planning Session",
        "description": "Internal planning for the second semester.",
        "event_type": "meetup",
        "date": "2026-03-15T15:00:00+02:00",
        "end_date": None,
        "location": "Conference Hall",
        "max_attendees": 10,
        "image_url": None,
        "is_published": False,
        "created_at": "2026-01-20T10:00:00+02:00",
    },
]

EVENT_RSVPS: Final[list[dict[str, Any]]] = [
    {
        "id": "rsvp-1",
        "event_id": "6",
        "member_id": DEMO_USER_ID,
        "status": "attended",
        "created_at": "2026-02-01T10:00:00+02:00",
    },
    {
        "id": "rsvp-2",
        "event_id": "1",
        "member_id": DEMO_USER_ID,
        "status": "attended",
        "created_at": "2026-02-02T10:00:00+02:00",
    },
    {
        "id": "rsvp-3",
        "event_id": "4",
        "member_id": DEMO_USER_ID,
        "status": "registered",
        "created_at": "2026-02-03T10:00:00+02:00",
    },
    {
        "id": "rsvp-4",
        "event_id": "5",
        "member_id": DEMO_USER_ID,
        "status": "registered",
        "created_at": "2026-02-04T10:00:00+02:00",
    },
    {
        "id": "rsvp-5",
        "event_id": "4",
        "member_id": "5",
        "status": "registered",
        "created_at": "2026-02-05T10:00:00+02:00",
    },
]

PROJECTS: Final[list[dict[str, Any]]] = [
    {
        "id": "1",
        "title": "Kigali Health Assistant",
        "description": "AI-powered health Q&A system designed for rural clinics in Rwanda, "
        "providing accessible medical information in Kinyarwanda and English.",
        "long_description": None,
        "category": "Healthcare",
        "image_url": None,
        "github_url": "https://github.com/cbc-ur/kigali-health",
        "demo_url": "https://kigali-health.demo.com",
        "tech_stack": ["Claude API", "Healthcare", "Bilingual"],
        "is_featured": True,
        "created_at": "2026-01-20T10:00:00+02:00",
    },
    {
        "id": "2",
        "title": "Inyarwanda Tutor",
        "description": "Interactive Kinyarwanda language learning platform that uses Claude to "
        "provide personalized lessons, pronunciation feedback, and cultural context.",
        "long_description": None,
        "category": "Education",
        "image_url": None,
        "github_url": "https://github.com/cbc-ur/inyarwanda-tutor",
        "demo_url": None,
        "tech_stack": ["Language Learning", "Claude API", "Education"],
        "is_featured": True,
        "created_at": "2026-01-22T10:00:00+02:00",
    },
    {
        "id": "3",
        "title": "AgriSmart Rwanda",
        "description": "Farming advice chatbot tailored for local farmers, providing guidance "
        "on crop selection, pest management, and weather-based recommendations.",
        "long_description": None,
        "category": "Chatbots",
        "image_url": None,
        "github_url": "https://github.com/cbc-ur/agrismart",
        "demo_url": None,
        "tech_stack": ["Agriculture", "Chatbot", "SMS Integration"],
        "is_featured": False,
        "created_at": "2026-02-01T10:00:00+02:00",
    },
    {
        "id": "4",
        "title": "StudyBuddy UR",
        "description": "AI study companion for University of Rwanda students, offering "
        "course-specific help, exam preparation, and collaborative learning features.",
        "long_description": None,
        "category": "Education",
        "image_url": None,
        "github_url": "https://github.com/cbc-ur/studybuddy",
        "demo_url": "https://studybuddy-ur.demo.com",
        "tech_stack": ["Education", "Web App", "Study Tools"],
        "is_featured": True,
        "created_at": "2026-01-25T10:00:00+02:00",
    },
    {
        "id": "5",
        "title": "Rwanda Heritage Guide",
        "description": "Cultural tourism assistant that helps visitors explore Rwanda's rich "
        "heritage, traditions, and historical sites with AI-powered storytelling.",
        "long_description": None,
        "category": "Web Apps",
        "image_url": None,
        "github_url": None,
        "demo_url": "https://rwanda-heritage.demo.com",
        "tech_stack": ["Tourism", "Culture", "Web App"],
        "is_featured": False,
        "created_at": "2026-02-03T10:00:00+02:00",
    },
    {
        "id": "6",
        "title": "CodeMentor",
        "description": "Programming tutor powered by Claude API, providing personalized coding "
        "lessons, code reviews, and debugging help for aspiring developers.",
        "long_description": None,
        "category": "Education",
        "image_url": None,
        "github_url": "https://github.com/cbc-ur/codementor",
        "demo_url": None,
        "tech_stack": ["Programming", "Claude API", "Learning"],
        "is_featured": False,
        "created_at": "2026-02-05T10:00:00+02:00",
    },
]

PROJECT_MEMBERS: Final[list[dict[str, Any]]] = [
    {"project_id": "1", "member_id": DEMO_USER_ID, "role": "owner"},
    {"project_id": "1", "member_id": "2", "role": "member"},
    {"project_id": "2", "member_id": "3", "role": "owner"},
    {"project_id": "3", "member_id": "4", "role": "owner"},
    {"project_id": "4", "member_id": DEMO_USER_ID, "role": "owner"},
    {"project_id": "4", "member_id": "1", "role": "member"},
    {"project_id": "5", "member_id": "5", "role": "owner"},
    {"project_id": "6", "member_id": "1", "role": "owner"},
]

ARTICLES: Final[list[dict[str, Any]]] = [
    {
        "id": "1",
        "title": "Getting Started with Claude API",
        "slug": "getting-started-with-claude-api",
        "content": "# Getting Started with Claude API\n\n"
        "Welcome to this guide on getting started with the Claude API.\n\n"
        "## Prerequisites\n\n- A valid API key\n- Basic programming knowledge\n\n"
        "## Best Practices\n\n1. Handle errors gracefully\n2. Use streaming for long "
        "responses\n3. Store your API key securely\n",
        "excerpt": "Learn how to make your first API call to Claude and build AI-powered "
        "applications.",
        "author_id": "1",
        "category": "tutorial",
        "cover_image_url": "https://images.unsplash.com/photo-1677442136019-21780ecad995?w=800",
        "published": True,
        "created_at": "2026-02-10T10:00:00Z",
        "updated_at": "2026-02-10T10:00:00Z",
    },
    {
        "id": "2",
        "title": "Building a Smart Study Assistant with Claude",
        "slug": "building-smart-study-assistant",
        "content": "# Building a Smart Study Assistant with Claude\n\n"
        "In this walkthrough we build a study assistant that summarizes lecture notes, "
        "generates practice questions and explains complex concepts.\n",
        "excerpt": "A step-by-step guide to creating an AI-powered study companion for "
        "students.",
        "author_id": "2",
        "category": "project",
        "cover_image_url": "https://images.unsplash.com/photo-1456513080510-7bf3a84b82f8?w=800",
        "published": True,
        "created_at": "2026-02-08T14:30:00Z",
        "updated_at": "2026-02-08T14:30:00Z",
    },
    {
        "id": "3",
        "title": "CBC-UR Launches First AI Hackathon",
        "slug": "cbc-ur-launches-first-hackathon",
        "content": "# CBC-UR Launches First AI Hackathon\n\n"
        "We're thrilled to announce our inaugural AI Hackathon. Theme: AI for Rwandan "
        "Communities.\n",
        "excerpt": "Join us for 48 hours of building, learning, and competing with Claude API.",
        "author_id": "1",
        "category": "news",
        "cover_image_url": "https://images.unsplash.com/photo-1504384308090-c894fdcc538d?w=800",
        "published": True,
        "created_at": "2026-02-05T09:00:00Z",
        "updated_at": "2026-02-05T09:00:00Z",
    },
    {
        "id": "4",
        "title": "Understanding Prompt Engineering Fundamentals",
        "slug": "prompt-engineering-fundamentals",
        "content": "# Understanding Prompt Engineering Fundamentals\n\n"
        "Prompt engineering is the art and science of crafting effective inputs for "
        "large language models.\n",
        "excerpt": "Master the essential techniques for crafting effective prompts for Claude "
        "and other LLMs.",
        "author_id": "2",
        "category": "tutorial",
        "cover_image_url": "https://images.unsplash.com/photo-1516321318423-f06f85e504b3?w=800",
        "published": True,
        "created_at": "2026-02-01T16:00:00Z",
        "updated_at": "2026-02-01T16:00:00Z",
    },
    {
        "id": "5",
        "title": "Draft: Demo Day Recap",
        "slug": "draft-demo-day-recap",
        "content": "Notes for the demo day recap.",
        "excerpt": None,
        "author_id": DEMO_USER_ID,
        "category": "event",
        "cover_image_url": None,
        "published": False,
        "created_at": "2026-02-12T09:00:00Z",
        "updated_at": "2026-02-12T09:00:00Z",
    },
]

SUBSCRIBERS: Final[list[dict[str, Any]]] = [
    {"id": "sub-1", "email": "alumni@ur.ac.rw", "subscribed_at": "2026-01-20T08:00:00Z"},
    {"id": "sub-2", "email": "mentor@example.com", "subscribed_at": "2026-01-28T08:00:00Z"},
    {"id": "sub-3", "email": "faculty@ur.ac.rw", "subscribed_at": "2026-02-02T08:00:00Z"},
]

CONTENT_CREATED_AT: Final[str] = "2025-09-01T08:00:00Z"

FEATURES: Final[list[dict[str, Any]]] = [
    {
        "id": "1",
        "icon": "book-open",
        "title_en": "Learn AI Development",
        "title_rw": "Wige Iterambere rya AI",
        "description_en": "Master prompt engineering, Claude API integration, and build "
        "intelligent applications through hands-on workshops.",
        "description_rw": "Menya ubuhanga bwo gukoresha prompt, gukoresha Claude API, no kubaka "
        "porogaramu zifite ubwenge binyuze mu mahugurwa akora ku buryo nyabwo.",
        "sort_order": 1,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "2",
        "icon": "code",
        "title_en": "Build Real Projects",
        "title_rw": "Kora Imishinga Nyayo",
        "description_en": "Work on meaningful projects that solve local challenges in "
        "healthcare, education, agriculture, and more.",
        "description_rw": "Kora ku mishinga ifite intego ikemura ibibazo by'aho uri mu buzima "
        "busanzwe, uburezi, ubuhinzi, n'ibindi.",
        "sort_order": 2,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "3",
        "icon": "users",
        "title_en": "Connect & Grow",
        "title_rw": "Huza & Kura",
        "description_en": "Network with fellow builders, industry professionals, and "
        "Anthropic's global community of developers.",
        "description_rw": None,
        "sort_order": 3,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "4",
        "icon": "presentation",
        "title_en": "Showcase Your Work",
        "title_rw": "Erekana Akazi Kawe",
        "description_en": "Present your projects at demo days, hackathons, and gain "
        "recognition for your innovative solutions.",
        "description_rw": "Tanga imishinga yawe mu minsi yo kwerekana, amarushanwa, kandi "
        "uhabwe icyubahiro ku bisubizo byawe bishya.",
        "sort_order": 4,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "5",
        "icon": "award",
        "title_en": "Earn Certificates",
        "title_rw": None,
        "description_en": "Certificates for completed learning tracks (coming soon).",
        "description_rw": None,
        "sort_order": 0,
        "is_active": False,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
]

TEAM_MEMBERS: Final[list[dict[str, Any]]] = [
    {
        "id": "1",
        "name": "Jean Paul Mugisha",
        "role_en": "Club President",
        "role_rw": "Perezida w'Ishyirahamwe",
        "bio_en": "Computer Science student passionate about AI and its potential to "
        "transform Rwanda.",
        "bio_rw": "Umunyeshuri wa Computer Science ukunda AI n'ubushobozi bwayo bwo guhindura "
        "u Rwanda.",
        "image_url": None,
        "linkedin_url": None,
        "twitter_url": None,
        "github_url": None,
        "sort_order": 1,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "2",
        "name": "Marie Claire Uwimana",
        "role_en": "Vice President",
        "role_rw": "Visi Perezida",
        "bio_en": "Software Engineering student focused on building AI solutions for healthcare.",
        "bio_rw": "Umunyeshuri wa Software Engineering yibanda ku kubaka ibisubizo bya AI mu "
        "buzima.",
        "image_url": None,
        "linkedin_url": None,
        "twitter_url": None,
        "github_url": None,
        "sort_order": 2,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "3",
        "name": "Eric Habimana",
        "role_en": "Technical Lead",
        "role_rw": "Umuyobozi w'Ikoranabuhanga",
        "bio_en": "Full-stack developer with experience in machine learning and Claude API "
        "integration.",
        "bio_rw": None,
        "image_url": None,
        "linkedin_url": None,
        "twitter_url": None,
        "github_url": None,
        "sort_order": 3,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "4",
        "name": "Alice Mukamana",
        "role_en": "Events Coordinator",
        "role_rw": "Uhuzabikorwa",
        "bio_en": "Business Administration student managing club activities and community "
        "engagement.",
        "bio_rw": "Umunyeshuri wa Business Administration uyobora ibikorwa by'ishyirahamwe "
        "n'ubufatanye n'abaturage.",
        "image_url": None,
        "linkedin_url": None,
        "twitter_url": None,
        "github_url": None,
        "sort_order": 4,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
]

PARTNERS: Final[list[dict[str, Any]]] = [
    {
        "id": "1",
        "name": "Anthropic",
        "logo_url": None,
        "website_url": "https://www.anthropic.com",
        "description_en": "AI safety company and creator of Claude, our primary technology "
        "partner.",
        "description_rw": "Sosiyete y'umutekano wa AI n'uwahanze Claude, umufatanyabikorwa wacu "
        "w'ibanze mu ikoranabuhanga.",
        "tier": "platinum",
        "sort_order": 1,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "2",
        "name": "University of Rwanda",
        "logo_url": None,
        "website_url": "https://ur.ac.rw",
        "description_en": "Our home institution providing space, support, and academic guidance.",
        "description_rw": "Kaminuza yacu itanga umwanya, ubufasha, n'ubuyobozi bw'amasomo.",
        "tier": "platinum",
        "sort_order": 2,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "3",
        "name": "Rwanda ICT Chamber",
        "logo_url": None,
        "website_url": "https://ictchamber.rw",
        "description_en": "Supporting tech ecosystem development and connecting us with industry.",
        "description_rw": "Gushyigikira iterambere ry'ikoranabuhanga no kuduhuza n'inganda.",
        "tier": "gold",
        "sort_order": 3,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "4",
        "name": "Kigali Innovation Hub",
        "logo_url": None,
        "website_url": None,
        "description_en": "Co-working space hosting our weekend build sessions.",
        "description_rw": None,
        "tier": "partner",
        "sort_order": 0,
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "5",
        "name": "Former Sponsor Ltd",
        "logo_url": None,
        "website_url": None,
        "description_en": None,
        "description_rw": None,
        "tier": "silver",
        "sort_order": 5,
        "is_active": False,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
]

MILESTONES: Final[list[dict[str, Any]]] = [
    {
        "id": "3",
        "date": "2024-11-20",
        "title_en": "Hackathon Launch",
        "title_rw": "Gutangiza Amarushanwa",
        "description_en": "Organized our first AI hackathon focused on local challenges.",
        "description_rw": "Twateguye amarushanwa yacu ya mbere ya AI yibanda ku bibazo by'aho.",
        "icon": "trophy",
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "1",
        "date": "2024-09-01",
        "title_en": "Club Founded",
        "title_rw": "Ishyirahamwe Ryashinzwe",
        "description_en": "CBC-UR was officially established at University of Rwanda.",
        "description_rw": "CBC-UR yashinzwe mu buryo bwemewe muri Kaminuza y'u Rwanda.",
        "icon": "flag",
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "4",
        "date": "2025-01-10",
        "title_en": "100 Members",
        "title_rw": "Abanyamuryango 100",
        "description_en": "Reached 100 active members milestone.",
        "description_rw": "Twageze ku ntego y'abanyamuryango 100 bakora.",
        "icon": "star",
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "2",
        "date": "2024-10-15",
        "title_en": "First Workshop",
        "title_rw": "Ihugurwa rya Mbere",
        "description_en": "Hosted our first Claude API workshop with 50+ attendees.",
        "description_rw": "Twakoreye ihugurwa ryacu rya mbere rya Claude API ririmo abantu 50+.",
        "icon": "users",
        "is_active": True,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "5",
        "date": "2025-03-01",
        "title_en": "Draft: Regional Chapter",
        "title_rw": None,
        "description_en": None,
        "description_rw": None,
        "icon": "map",
        "is_active": False,
        "created_at": CONTENT_CREATED_AT,
        "updated_at": CONTENT_CREATED_AT,
    },
]

SITE_STATS: Final[list[dict[str, Any]]] = [
    {
        "id": "1", "key": "members", "value": 120, "label_en": "Active Members",
        "label_rw": "Abanyamuryango Bakora", "icon": "users", "sort_order": 1,
        "is_active": True, "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "2", "key": "projects", "value": 25, "label_en": "Projects Built",
        "label_rw": "Imishinga Yakozwe", "icon": "folder-kanban", "sort_order": 2,
        "is_active": True, "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "3", "key": "workshops", "value": 15, "label_en": "Workshops Held",
        "label_rw": "Amahugurwa Yakorewe", "icon": "presentation", "sort_order": 3,
        "is_active": True, "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "4", "key": "partners", "value": 8, "label_en": "Industry Partners",
        "label_rw": "Abo Dufatanya", "icon": "handshake", "sort_order": 4,
        "is_active": True, "updated_at": CONTENT_CREATED_AT,
    },
]

SITE_CONTENT: Final[list[dict[str, Any]]] = [
    {
        "id": "1", "key": "hero.title", "language": "en", "category": "home",
        "value": "Build the future of AI in Rwanda", "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "2", "key": "hero.title", "language": "rw", "category": "home",
        "value": "Twubake ejo hazaza ha AI mu Rwanda", "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "3", "key": "hero.subtitle", "language": "en", "category": "home",
        "value": "The Claude Builder Club at the University of Rwanda.",
        "updated_at": CONTENT_CREATED_AT,
    },
    {
        "id": "4", "key": "footer.tagline", "language": "en", "category": "footer",
        "value": "Learn. Build. Share.", "updated_at": CONTENT_CREATED_AT,
    },
]

SEED_TABLES: Final[dict[str, list[dict[str, Any]]]] = {
    "members": MEMBERS,
    "events": EVENTS,
    "event_rsvps": EVENT_RSVPS,
    "projects": PROJECTS,
    "project_members": PROJECT_MEMBERS,
    "articles": ARTICLES,
    "subscribers": SUBSCRIBERS,
    "features": FEATURES,
    "team_members": TEAM_MEMBERS,
    "partners": PARTNERS,
    "milestones": MILESTONES,
    "site_stats": SITE_STATS,
    "site_content": SITE_CONTENT,
}


def seed_tables() -> dict[str, list[dict[str, Any]]]:
    """Return a deep copy of every seed table, safe to mutate."""
    return copy.deepcopy(SEED_TABLES)
