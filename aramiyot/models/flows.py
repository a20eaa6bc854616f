"""
Request/response contracts for the AI flows
"""
from pydantic import BaseModel, Field, StrictStr
from typing import Optional, List


class ChatFlowInput(BaseModel):
    """Health inquiry from the user, optionally with a photo"""
    inquiry: StrictStr = Field(..., min_length=1, description="The health inquiry from the user.")
    photo_data_uri: Optional[StrictStr] = Field(
        None,
        alias="photoDataUri",
        description="An optional photo related to the inquiry, as a data URI that must include "
                    "a MIME type and use Base64 encoding. Expected format: "
                    "'data:<mimetype>;base64,<encoded_data>'."
    )

    class Config:
        populate_by_name = True


class ChatFlowOutput(BaseModel):
    """Response to the health inquiry"""
    response: str = Field(..., description="The response to the health inquiry.")


class RecommendationInput(BaseModel):
    """User activity used to personalize recommendations"""
    user_activity: StrictStr = Field(
        ...,
        min_length=1,
        alias="userActivity",
        description="A description of the user historical activity and preferences on the platform."
    )

    class Config:
        populate_by_name = True


class RecommendationOutput(BaseModel):
    """Personalized recommendations"""
    recommendations: List[str] = Field(
        default_factory=list,
        description="An array of personalized wellness resource recommendations."
    )


class HospitalSuggestionInput(BaseModel):
    """Symptoms or needs with optional preferences"""
    symptoms_or_needs: StrictStr = Field(
        ...,
        min_length=1,
        alias="symptomsOrNeeds",
        description="A description of the user's symptoms or medical needs."
    )
    preferred_specialty: Optional[StrictStr] = Field(
        None, alias="preferredSpecialty", description="User's preferred medical specialty, if any."
    )
    location_preference: Optional[StrictStr] = Field(
        None, alias="locationPreference", description="User's preferred location, if any."
    )

    class Config:
        populate_by_name = True


class SuggestedMedicalService(BaseModel):
    """A single suggested service or specialty"""
    service_or_specialty: str = Field(
        ...,
        alias="serviceOrSpecialty",
        description="The suggested hospital service or medical specialty "
                    "(e.g., Cardiology, Emergency Room, Orthopedic Surgeon)."
    )
    reason: str = Field(
        ..., description="A brief reason why this service/specialty is suggested based on the user's input."
    )
    suggested_doctor_name: Optional[str] = Field(
        None,
        alias="suggestedDoctorName",
        description="A suggested doctor's name, if a specific one can be identified as highly relevant."
    )
    relevant_hospital_name: Optional[str] = Field(
        None,
        alias="relevantHospitalName",
        description="A relevant hospital name, if applicable for the suggested service."
    )

    class Config:
        populate_by_name = True


class HospitalSuggestionOutput(BaseModel):
    """Up to three suggestions plus general advice"""
    suggestions: List[SuggestedMedicalService] = Field(
        default_factory=list,
        max_length=3,
        description="An array of up to 3 medical service or specialty suggestions."
    )
    additional_advice: str = Field(
        "", alias="additionalAdvice", description="Any general additional advice for the user."
    )

    class Config:
        populate_by_name = True
