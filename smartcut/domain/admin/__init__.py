"""Platform statistics and salon moderation"""
