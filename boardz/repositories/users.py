"""
User and profile repository (users, user_profiles tables)
"""

from typing import Any, Dict, List, Optional

from .. import config
from ..models import UserProfile, UserRecord
from .base import BaseRepository, utc_now


class UserRepository(BaseRepository):
    table_name = config.USERS_TABLE

    def profiles(self):
        return self.supabase.table(config.PROFILES_TABLE)

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        row = self.first(
            self.table().select('*').eq('id', user_id).limit(1),
            'find_by_id'
        )
        return self.parse(UserRecord.model_validate, row, 'find_by_id') if row else None

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        row = self.first(
            self.table().select('*').eq('email', email).limit(1),
            'find_by_email'
        )
        return self.parse(UserRecord.model_validate, row, 'find_by_email') if row else None

    def create(self, email: str) -> Optional[UserRecord]:
        row = self.first(self.table().insert({'email': email}), 'create')
        return self.parse(UserRecord.model_validate, row, 'create') if row else None

    # Profiles

    def find_profile(self, user_id: str) -> Optional[UserProfile]:
        row = self.first(
            self.profiles().select('*').eq('user_id', user_id).limit(1),
            'find_profile'
        )
        return self.parse(UserProfile.model_validate, row, 'find_profile') if row else None

    def upsert_profile(self, user_id: str, profile_data: Dict[str, Any]) -> Optional[UserProfile]:
        row = self.first(
            self.profiles().upsert(
                [{'user_id': user_id, 'profile_data': profile_data, 'updated_at': utc_now()}],
                on_conflict='user_id'
            ),
            'upsert_profile'
        )
        return self.parse(UserProfile.model_validate, row, 'upsert_profile') if row else None

    def find_all_profiles(self) -> List[UserProfile]:
        """Every profile with the owner's email flattened in"""
        rows = self.execute(
            self.profiles().select('*, users(email)').order('created_at', desc=True),
            'find_all_profiles'
        )

        profiles = []
        for row in rows:
            owner = row.get('users') or {}
            flat = {key: value for key, value in row.items() if key != 'users'}
            flat['email'] = owner.get('email') or ''
            profiles.append(self.parse(UserProfile.model_validate, flat, 'find_all_profiles'))
        return profiles
