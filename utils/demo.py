#!/usr/bin/env python3
"""Canned change set and description used by ``pr-gen --demo``."""

from utils.change_models import ChangeSet, ChangedFile

_ENDPOINTS_DIFF = """\
+ import express from 'express';
+
+ const router = express.Router();
+
+ // GET /api/users - list users
+ router.get('/users', async (req, res) => {
+   try {
+     const users = await User.findAll();
+     res.json(users);
+   } catch (error) {
+     res.status(500).json({ error: 'Failed to fetch users' });
+   }
+ });
+
+ // POST /api/users - create a user
+ router.post('/users', async (req, res) => {
+   try {
+     const { name, email, password } = req.body;
+     const user = await User.create({ name, email, password });
+     res.status(201).json(user);
+   } catch (error) {
+     res.status(400).json({ error: 'Failed to create user' });
+   }
+ });"""

_USER_LIST_DIFF = """\
+ import React, { useState, useEffect } from 'react';
+ import { User } from '../types/user';
+
+ export const UserList: React.FC<{ onUserSelect?: (user: User) => void }> = ({ onUserSelect }) => {
+   const [users, setUsers] = useState<User[]>([]);
+   const [loading, setLoading] = useState(true);
+   const [error, setError] = useState<string | null>(null);
+
+   useEffect(() => {
+     fetch('/api/users')
+       .then((response) => response.json())
+       .then(setUsers)
+       .catch((err) => setError(err.message))
+       .finally(() => setLoading(false));
+   }, []);"""

_USER_TYPES_DIFF = """\
+ export interface User {
+   id: number;
+   name: string;
+   email: string;
+   createdAt: Date;
+   updatedAt: Date;
+ }
+
+ export interface CreateUserRequest {
+   name: string;
+   email: string;
+   password: string;
+ }"""

DEMO_DESCRIPTION = """\
# User Management System Implementation

## Overview
Adds user management: REST endpoints for listing and creating users, a React
component that renders the user list, and shared TypeScript types.

## Key Changes

### Backend API Endpoints
- **Modified** `src/api/endpoints.ts`: Express router for users
  - `GET /api/users` returns all users
  - `POST /api/users` creates a user from name, email and password

### Frontend Components
- **Added** `src/components/UserList.tsx`: fetches `/api/users` and renders the
  result with loading and error states

### TypeScript Types
- **Added** `src/types/user.ts`: `User` and `CreateUserRequest` interfaces

## Testing Considerations
- Exercise both endpoints with valid and invalid payloads
- Check the 500/400 error responses
- Render `UserList` with loading, empty, error and populated states

## Notes for Reviewers
- Passwords are accepted in the create payload; confirm hashing happens in the model layer
- Error messages are returned verbatim to the client

## Impact
Gives the application a first user management flow that later CRUD operations
can build on.

## API Changes Diagram

```mermaid
sequenceDiagram
    participant C as Client
    participant S as Server
    participant D as Database

    C->>S: GET /api/users
    S->>D: Query all users
    D-->>S: User rows
    S-->>C: 200 JSON list

    C->>S: POST /api/users
    S->>D: Insert user
    D-->>S: New user row
    S-->>C: 201 Created
```"""


def create_demo_changes() -> ChangeSet:
    files = [
        ChangedFile(path="src/api/endpoints.ts", status="modified", additions=45, deletions=12, diff=_ENDPOINTS_DIFF),
        ChangedFile(path="src/components/UserList.tsx", status="added", additions=67, deletions=0, diff=_USER_LIST_DIFF),
        ChangedFile(path="src/types/user.ts", status="added", additions=23, deletions=0, diff=_USER_TYPES_DIFF),
    ]
    return ChangeSet(
        files=files,
        summary="Changes in 3 files: 135 additions, 12 deletions",
        branch_name="feature/user-management",
        base_branch="main",
        total_files=len(files),
    )


def generate_demo_description() -> str:
    return DEMO_DESCRIPTION
