# CRUD routes for residents, emergency contacts, complaints and announcements.

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from barangay.routes.deps import get_records

router = APIRouter(tags=["records"])


class ResidentIn(BaseModel):
    firstName: str | None = None
    middleName: str | None = None
    lastName: str | None = None
    dob: str | None = None
    age: int | None = None
    sex: str | None = None
    address: str | None = None
    contact: str | None = None
    civilStatus: str | None = None
    occupation: str | None = None
    voterStatus: str | None = None
    specialCategory: str | None = None


class EmergencyContactIn(BaseModel):
    id: str | None = None
    name: str | None = None
    phone: str | None = None
    email: str | None = None


class ComplaintIn(BaseModel):
    id: str | None = None
    name: str | None = None
    email: str | None = None
    type: str | None = None
    message: str | None = None
    status: str | None = None
    date: str | None = None


class ComplaintStatusIn(BaseModel):
    status: str | None = None


class AnnouncementIn(BaseModel):
    title: str | None = None
    caption: str | None = None
    image: str | None = None
    date: str | None = None


def _body(model: BaseModel) -> dict:
    return model.model_dump(exclude_none=True)


# ===== Residents =====
@router.post("/residents", status_code=201)
def create_resident(req: ResidentIn, records: dict = Depends(get_records)):
    resident = records["residents"].create(_body(req))
    return {"message": "Resident saved successfully", "id": resident["id"]}


@router.post("/residents/bulk", status_code=201)
def import_residents(req: List[ResidentIn], records: dict = Depends(get_records)):
    saved = records["residents"].create_many(_body(r) for r in req)
    return {"message": "Residents imported successfully", "data": saved}


@router.get("/residents")
def list_residents(records: dict = Depends(get_records)):
    return records["residents"].list()


@router.get("/residents/{resident_id}")
def get_resident(resident_id: str, records: dict = Depends(get_records)):
    return records["residents"].get(resident_id)


@router.put("/residents/{resident_id}")
def update_resident(resident_id: str, req: ResidentIn, records: dict = Depends(get_records)):
    records["residents"].update(resident_id, req.model_dump(exclude_unset=True))
    return {"message": "Resident updated successfully"}


@router.delete("/residents/{resident_id}")
def delete_resident(resident_id: str, records: dict = Depends(get_records)):
    records["residents"].delete(resident_id)
    return {"message": "Resident deleted successfully"}


# ===== Emergency Contacts =====
@router.post("/emergency-contacts", status_code=201)
def create_emergency_contact(req: EmergencyContactIn, records: dict = Depends(get_records)):
    records["emergency_contacts"].create(_body(req))
    return {"message": "Emergency contact saved successfully"}


@router.get("/emergency-contacts")
def list_emergency_contacts(records: dict = Depends(get_records)):
    return records["emergency_contacts"].list()


# ===== Complaints =====
@router.post("/complaints", status_code=201)
def create_complaint(req: ComplaintIn, records: dict = Depends(get_records)):
    complaint = records["complaints"].create(_body(req))
    return {"message": "Complaint saved successfully", "id": complaint["id"]}


@router.get("/complaints")
def list_complaints(records: dict = Depends(get_records)):
    return records["complaints"].list()


@router.put("/complaints/{complaint_id}")
def update_complaint_status(complaint_id: str, req: ComplaintStatusIn, records: dict = Depends(get_records)):
    records["complaints"].update_status(complaint_id, req.status)
    return {"message": "Complaint status updated successfully"}


@router.delete("/complaints/{complaint_id}")
def delete_complaint(complaint_id: str, records: dict = Depends(get_records)):
    records["complaints"].delete(complaint_id)
    return {"message": "Complaint deleted successfully"}


# ===== Announcements =====
@router.post("/announcements", status_code=201)
def create_announcement(req: AnnouncementIn, records: dict = Depends(get_records)):
    announcement = records["announcements"].create(_body(req))
    return {"message": "Announcement posted successfully", "announcement": announcement}


@router.get("/announcements")
def list_announcements(records: dict = Depends(get_records)):
    return records["announcements"].list()


@router.get("/announcements/recent")
def recent_announcements(records: dict = Depends(get_records)):
    return records["announcements"].recent()


@router.delete("/announcements/{announcement_id}")
def delete_announcement(announcement_id: str, records: dict = Depends(get_records)):
    records["announcements"].delete(announcement_id)
    return {"message": "Announcement deleted successfully"}
