"""
Sample directory and room data loaded into a fresh store.
"""
import logging

from safespace.core.memory.schemas import InsertChatRoom, InsertTherapist

logger = logging.getLogger(__name__)

_IMG = "https://images.unsplash.com/{}?auto=format&fit=crop&w=400&h=400"

SAMPLE_THERAPISTS = [
    InsertTherapist(
        name="Dr. Sarah Johnson",
        specialty="Anxiety & Depression Specialist",
        education="PhD in Clinical Psychology",
        experience="8 years experience",
        rating="4.9 (127 reviews)",
        email="contact@example.com",
        phone="(555) 123-4567",
        bio=(
            "Dr. Johnson specializes in cognitive behavioral therapy and has extensive "
            "experience helping clients manage anxiety and depression."
        ),
        imageUrl=_IMG.format("photo-1559839734-2b71ea197ec2"),
    ),
    InsertTherapist(
        name="Dr. Michael Chen",
        specialty="Relationship & Family Therapy",
        education="MA in Marriage & Family Therapy",
        experience="12 years experience",
        rating="4.8 (89 reviews)",
        email="contact@example.com",
        phone="(555) 234-5678",
        bio=(
            "Dr. Chen focuses on relationship dynamics and family systems therapy, "
            "helping couples and families build stronger connections."
        ),
        imageUrl=_IMG.format("photo-1612349317150-e413f6a5b16d"),
    ),
    InsertTherapist(
        name="Dr. Emily Rodriguez",
        specialty="Trauma & PTSD Specialist",
        education="PsyD in Clinical Psychology",
        experience="15 years experience",
        rating="5.0 (156 reviews)",
        email="contact@example.com",
        phone="(555) 345-6789",
        bio=(
            "Dr. Rodriguez specializes in trauma-informed therapy and EMDR, helping "
            "clients heal from traumatic experiences."
        ),
        imageUrl=_IMG.format("photo-1594824709602-7b64f4c78ded"),
    ),
]

SAMPLE_CHAT_ROOMS = [
    InsertChatRoom(
        name="Anxiety Support Circle",
        description="A safe space to discuss anxiety and coping strategies",
    ),
    InsertChatRoom(
        name="Depression Recovery",
        description="Share experiences and find hope together",
    ),
    InsertChatRoom(
        name="General Support",
        description="Open conversation for any topic",
    ),
]


def seed_sample_data(storage) -> None:
    """Create the sample therapists and chat rooms."""
    for therapist in SAMPLE_THERAPISTS:
        storage.create_therapist(therapist)
    for room in SAMPLE_CHAT_ROOMS:
        storage.create_chat_room(room)
    logger.info(
        "Seeded %d therapists and %d chat rooms",
        len(SAMPLE_THERAPISTS),
        len(SAMPLE_CHAT_ROOMS),
    )
