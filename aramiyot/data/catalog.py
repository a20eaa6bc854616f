"""
Static wellness catalog and hospital directory
"""
from typing import Dict, List, Optional

from ..models.resources import (
    ArticleResource, VideoResource, AudioResource, ResourceBase,
    Doctor, Service, Hospital
)

PLACEHOLDER_IMAGE = "https://placehold.co/600x400.png"


CURATED_WELLNESS_RESOURCES: List[ResourceBase] = [
    ArticleResource(
        id="CWR001",
        title="Beginner's Guide to Meditation",
        description="Learn the basics of meditation and start your journey to inner peace.",
        image_url=PLACEHOLDER_IMAGE,
        category="Mindfulness",
        content_url="#",
        duration="10 min read",
        data_ai_hint="meditation peace",
        content_markdown="""# A Beginner's Guide to Meditation

Meditation is a practice where an individual uses a technique, such as mindfulness or focusing the mind on a particular object, thought, or activity, to train attention and awareness and achieve a mentally clear and emotionally calm and stable state.

## Why Meditate?

*   Reduce stress
*   Control anxiety
*   Promote emotional health
*   Enhance self-awareness
*   Lengthen attention span

## Simple Meditation Exercise:

1.  **Find a quiet place.** Sit or lie down comfortably.
2.  **Close your eyes.**
3.  **Breathe naturally.** Focus on your breath and how your body moves with each inhalation and exhalation.
4.  **Notice your thoughts.** If your mind wanders, gently return your focus to your breath.
5.  **Start small.** Begin with just 5-10 minutes a day.
""",
    ),
    ArticleResource(
        id="CWR002",
        title="10 Quick & Healthy Breakfast Ideas",
        description="Fuel your day with these easy and nutritious breakfast recipes.",
        image_url=PLACEHOLDER_IMAGE,
        category="Nutrition",
        content_url="#",
        duration="15 min read",
        data_ai_hint="healthy food",
        content_markdown="""# 10 Quick & Healthy Breakfast Ideas

Starting your day with a nutritious breakfast can set the tone for better choices throughout the day. Here are some quick and healthy ideas:

1.  **Overnight Oats:** Combine oats, milk (or yogurt), chia seeds, and your favorite fruits in a jar. Refrigerate overnight.
2.  **Avocado Toast:** Whole-grain toast topped with mashed avocado, a sprinkle of salt, pepper, and red pepper flakes.
3.  **Greek Yogurt with Berries:** High in protein and antioxidants. Add a drizzle of honey or a sprinkle of nuts.
4.  **Smoothie:** Blend fruits, vegetables (like spinach), protein powder, and a liquid base.
5.  **Scrambled Eggs with Spinach:** A protein-packed classic.
6.  **Fruit Salad with Cottage Cheese:** A refreshing and light option.
7.  **Whole-Wheat Muffin with Peanut Butter:** Choose muffins low in sugar.
8.  **Quinoa Porridge:** A warm and hearty alternative to oatmeal.
9.  **Breakfast Burrito (mini):** Scrambled eggs, black beans, and salsa in a small whole-wheat tortilla.
10. **Hard-Boiled Eggs and an Apple:** Simple, portable, and balanced.
""",
    ),
    VideoResource(
        id="CWR003",
        title="Morning Yoga Flow for Energy",
        description="A 15-minute yoga routine to energize your body and mind.",
        image_url=PLACEHOLDER_IMAGE,
        category="Fitness",
        content_url="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        youtube_video_id="dQw4w9WgXcQ",
        duration="15 min video",
        data_ai_hint="yoga park",
    ),
    ArticleResource(
        id="CWR004",
        title="The Importance of Sleep for Wellbeing",
        description="Discover how quality sleep impacts your overall health and tips for better sleep.",
        image_url=PLACEHOLDER_IMAGE,
        category="Lifestyle",
        content_url="#",
        duration="12 min read",
        data_ai_hint="sleep wellness",
        content_markdown="""# The Importance of Sleep for Wellbeing

Sleep is a fundamental human need, like eating, drinking, and breathing. It is vital for good health and well-being throughout your lifetime.

## Why is Sleep Important?
Quality sleep can help protect your mental health, physical health, quality of life, and safety.

*   **Brain Function:** While you're sleeping, your brain is forming new pathways to help you learn and remember information.
*   **Emotional Well-being:** Sleep deficiency may lead to problems with decision-making, problem-solving, and coping with change.
*   **Physical Health:** Sleep is involved in healing and repair of your heart and blood vessels.
*   **Daytime Performance and Safety:** People who are sleep deficient are less productive at work and school.

## Tips for Better Sleep
*   Stick to a sleep schedule.
*   Create a restful environment.
*   Limit daytime naps.
*   Include physical activity in your daily routine.
*   Manage worries.
""",
    ),
    AudioResource(
        id="CWR005",
        title="Guided Deep Breathing Exercise",
        description="A short audio guide to practice deep breathing for stress relief.",
        image_url=PLACEHOLDER_IMAGE,
        category="Mindfulness",
        content_url="#",
        duration="5 min audio",
        data_ai_hint="breathing calm",
    ),
    ArticleResource(
        id="CWR006",
        title="Understanding Hydration",
        description="Learn why water is crucial for your body and how to stay properly hydrated.",
        image_url=PLACEHOLDER_IMAGE,
        category="Nutrition",
        content_url="#",
        duration="8 min read",
        data_ai_hint="water health",
        content_markdown="""# Understanding Hydration: The Importance of Water

Water is essential for life. Every cell, tissue, and organ in your body needs water to work correctly.

## Why is Hydration Important?

*   **Regulates Body Temperature:** Sweating helps cool your body, but you need to replenish the lost fluids.
*   **Transports Nutrients:** Water helps carry nutrients and oxygen to cells.
*   **Flushes Waste Products:** Adequate water intake enables your body to excrete waste.
*   **Lubricates Joints:** Long-term dehydration can reduce the joints' shock-absorbing ability.
*   **Supports Digestion:** Water helps break down the food you eat.

## How Much Water Do You Need?

A common recommendation is to drink eight 8-ounce glasses of water a day, about 2 liters. This is the "8x8 rule" and is easy to remember.

## Signs of Dehydration:

*   Dark urine or little urine
*   Dry mouth
*   Sleepiness or fatigue
*   Extreme thirst
*   Headache
*   Dizziness or lightheadedness

Stay hydrated!
""",
    ),
]


AUDIO_BOOK_SUMMARIES: List[ResourceBase] = [
    AudioResource(
        id="ABS001",
        title="Atomic Habits by James Clear",
        description="An easy and proven way to build good habits and break bad ones. "
                    "Key insights on making small changes for remarkable results.",
        image_url=PLACEHOLDER_IMAGE,
        data_ai_hint="book habit",
        category="Self-Improvement",
        content_url="#",
        duration="20 min audio",
    ),
    AudioResource(
        id="ABS002",
        title="Thinking, Fast and Slow by Daniel Kahneman",
        description="Explore the two systems that drive the way we think. "
                    "Learn about cognitive biases and how to make better decisions.",
        image_url=PLACEHOLDER_IMAGE,
        data_ai_hint="brain thought",
        category="Psychology",
        content_url="#",
        duration="25 min audio",
    ),
    AudioResource(
        id="ABS003",
        title="Sapiens by Yuval Noah Harari",
        description="A brief history of humankind, from the Stone Age to the present day, "
                    "exploring how Homo sapiens came to dominate the world.",
        image_url=PLACEHOLDER_IMAGE,
        data_ai_hint="history humanity",
        category="History",
        content_url="#",
        duration="30 min audio",
    ),
    AudioResource(
        id="ABS004",
        title="The Power of Now by Eckhart Tolle",
        description="A guide to spiritual enlightenment, focusing on living in the present moment "
                    "to achieve peace and happiness.",
        image_url=PLACEHOLDER_IMAGE,
        data_ai_hint="spiritual mindfulness",
        category="Spirituality",
        content_url="#",
        duration="22 min audio",
    ),
]


_DOCTORS = {
    "doc1": Doctor(id="doc1", name="Dr. Emily Carter", specialty="Cardiology", avatar_url="https://placehold.co/80x80.png"),
    "doc2": Doctor(id="doc2", name="Dr. Ben Adams", specialty="Orthopedics", avatar_url="https://placehold.co/80x80.png"),
    "doc3": Doctor(id="doc3", name="Dr. Olivia Chen", specialty="Pediatrics", avatar_url="https://placehold.co/80x80.png"),
    "doc4": Doctor(id="doc4", name="Dr. Marcus Green", specialty="Neurology", avatar_url="https://placehold.co/80x80.png"),
}

_SERVICES = {
    "serv1": Service(id="serv1", name="Cardiology", description="Comprehensive heart care and treatment."),
    "serv2": Service(id="serv2", name="Orthopedics", description="Musculoskeletal system treatment and surgery."),
    "serv3": Service(id="serv3", name="Pediatrics", description="Medical care for infants, children, and adolescents."),
    "serv4": Service(id="serv4", name="Neurology", description="Diagnosis and treatment of nervous system disorders."),
    "serv5": Service(id="serv5", name="Emergency Care", description="24/7 emergency medical services."),
    "serv6": Service(id="serv6", name="Oncology", description="Cancer diagnosis and treatment."),
}

HOSPITALS: List[Hospital] = [
    Hospital(
        id="hosp1",
        name="City General Hospital",
        address="123 Main St, Anytown, USA",
        image_url=PLACEHOLDER_IMAGE,
        services=[_SERVICES["serv1"], _SERVICES["serv2"], _SERVICES["serv5"]],
        doctors=[_DOCTORS["doc1"], _DOCTORS["doc2"]],
        phone="555-1234",
        website="https://example.com/citygeneral",
    ),
    Hospital(
        id="hosp2",
        name="Green Valley Community Clinic",
        address="456 Oak Ave, Anytown, USA",
        image_url=PLACEHOLDER_IMAGE,
        services=[_SERVICES["serv3"], _SERVICES["serv4"]],
        doctors=[_DOCTORS["doc3"], _DOCTORS["doc4"]],
        phone="555-5678",
        website="https://example.com/greenvalley",
    ),
    Hospital(
        id="hosp3",
        name="St. Luke's Medical Center",
        address="789 Pine Ln, Anytown, USA",
        image_url=PLACEHOLDER_IMAGE,
        services=[_SERVICES["serv1"], _SERVICES["serv4"], _SERVICES["serv6"]],
        doctors=[_DOCTORS["doc1"], _DOCTORS["doc4"]],
        phone="555-9012",
        website="https://example.com/stluke",
    ),
]


def get_resource(resource_id: str) -> Optional[ResourceBase]:
    """Look up a curated resource or audio summary by id"""
    for resource in CURATED_WELLNESS_RESOURCES + AUDIO_BOOK_SUMMARIES:
        if resource.id == resource_id:
            return resource
    return None


def list_resources(category: Optional[str] = None) -> List[ResourceBase]:
    if not category:
        return list(CURATED_WELLNESS_RESOURCES)
    wanted = category.lower()
    return [r for r in CURATED_WELLNESS_RESOURCES if r.category.lower() == wanted]


def hospital_directory() -> List[Dict[str, object]]:
    """Hospital summaries in the shape the suggestion prompt lists them"""
    return [
        {
            "name": hospital.name,
            "services": [service.name for service in hospital.services],
            "doctors": [f"{doctor.name} ({doctor.specialty})" for doctor in hospital.doctors],
        }
        for hospital in HOSPITALS
    ]
