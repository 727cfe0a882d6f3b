"""
Bootstrap dataset - written to empty storage on first access and served
by the remote backend when it is not configured.
"""

DEFAULT_USERS = [
    {
        "id": "1",
        "email": "iqac@university.edu",
        "name": "IQAC Admin",
        "role": "qa-office",
        "department": "Administration",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "2",
        "email": "hod@university.edu",
        "name": "Prof. Johnson",
        "role": "department-head",
        "department": "Computer Science",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "3",
        "email": "staff@university.edu",
        "name": "Dr. Smith",
        "role": "staff",
        "department": "Computer Science",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "4",
        "email": "staff2@university.edu",
        "name": "Dr. Brown",
        "role": "staff",
        "department": "Mathematics",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
    {
        "id": "5",
        "email": "staff3@university.edu",
        "name": "Prof. Wilson",
        "role": "staff",
        "department": "Physics",
        "created_at": "2024-01-01T00:00:00Z",
        "updated_at": "2024-01-01T00:00:00Z",
    },
]

DEFAULT_TASKS = [
    {
        "id": "1",
        "title": "Prepare Annual Quality Report",
        "description": "Compile and prepare the annual quality assurance report for NAAC submission",
        "assigned_to": "3",
        "created_by": "1",
        "department": "Computer Science",
        "due_date": "2024-02-15",
        "priority": "high",
        "status": "in_progress",
        "created_at": "2024-01-15T10:00:00Z",
        "updated_at": "2024-01-15T10:00:00Z",
    },
    {
        "id": "2",
        "title": "Update Curriculum Mapping",
        "description": "Review and update the curriculum mapping for the new academic year",
        "assigned_to": "4",
        "created_by": "1",
        "department": "Mathematics",
        "due_date": "2024-03-01",
        "priority": "medium",
        "status": "pending",
        "created_at": "2024-01-10T09:00:00Z",
        "updated_at": "2024-01-10T09:00:00Z",
    },
    {
        "id": "3",
        "title": "Faculty Development Program Report",
        "description": "Submit report on faculty development programs attended this semester",
        "assigned_to": "5",
        "created_by": "2",
        "department": "Physics",
        "due_date": "2024-02-28",
        "priority": "low",
        "status": "completed",
        "created_at": "2024-01-05T14:30:00Z",
        "updated_at": "2024-01-20T16:45:00Z",
    },
]

DEFAULT_FILES = [
    {
        "id": "1",
        "task_id": "1",
        "uploaded_by": "3",
        "file_name": "annual-report-draft.pdf",
        "file_size": 2048576,
        "file_type": "application/pdf",
        "file_url": "/placeholder.svg?height=400&width=600&text=Annual+Report+Draft",
        "upload_title": "Annual Report Draft",
        "description": "First draft of the annual quality assurance report",
        "category": "Assessment Reports",
        "status": "uploaded",
        "created_at": "2024-01-15T14:30:00Z",
    },
    {
        "id": "2",
        "task_id": "2",
        "uploaded_by": "4",
        "file_name": "curriculum-mapping.xlsx",
        "file_size": 1024000,
        "file_type": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "file_url": "/placeholder.svg?height=400&width=600&text=Curriculum+Mapping",
        "upload_title": "Curriculum Mapping Document",
        "description": "Updated curriculum mapping for mathematics department",
        "category": "Documentation",
        "status": "uploaded",
        "created_at": "2024-01-12T11:15:00Z",
    },
]
