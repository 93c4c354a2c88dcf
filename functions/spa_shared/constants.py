# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

# Firestore collections
ACTIVITIES_COLLECTION = "activities"

# Media host namespace for staff photos
STAFFS_FOLDER = "staffs"
STAFFS_PREFIX = STAFFS_FOLDER + "/"
STAFFS_LIST_MAX_RESULTS = 100

# 1x1 transparent GIF used to materialize an empty media folder
FOLDER_PLACEHOLDER_IMAGE = (
    "data:image/gif;base64,"
    "R0lGODlhAQABAPAAAP///wAAACH5BAAAAAAALAAAAAABAAEAAAICRAEAOw=="
)
FOLDER_PLACEHOLDER_PUBLIC_ID = "_init"

# Dashboard activity feed
RECENT_ACTIVITY_WINDOW_HOURS = 48
RECENT_ACTIVITY_LIMIT = 10

# Placeholder admin profile returned to any authenticated caller
ADMIN_PROFILE_NAME = "Admin User"
ADMIN_PROFILE_ROLE = "admin"
ADMIN_PROFILE_PERMISSIONS = (
    "manage_appointments",
    "manage_services",
    "manage_gallery",
)

APPOINTMENT_ALLOWED_METHODS = ("GET", "POST")
