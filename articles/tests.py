from django.test import TestCase
from django.urls import reverse

from accounts.models import User

from .models import Article


class ArticleManagementTests(TestCase):
    def setUp(self):
        self.kasir = User.objects.create_user(
            email='kasir@example.com', full_name='Kasir', password='password123', role='kasir',
        )

    def test_kasir_creates_article_as_author(self):
        self.client.force_login(self.kasir)

        response = self.client.post(reverse('article_create'), {
            'title': 'Padel for beginners',
            'content': 'Grip, stance and the first serve.',
            'is_published': 'on',
        })

        self.assertRedirects(response, reverse('article_list'))
        article = Article.objects.get()
        self.assertEqual(article.author, self.kasir)
        self.assertTrue(article.is_published)

    def test_edit_keeps_author(self):
        article = Article.objects.create(title='Draft', content='...', author=self.kasir)
        self.client.force_login(self.kasir)

        self.client.post(reverse('article_edit', args=[article.pk]), {
            'title': 'Final',
            'content': 'Done.',
        })

        article.refresh_from_db()
        self.assertEqual(article.title, 'Final')
        self.assertEqual(article.author, self.kasir)

    def test_delete_article(self):
        article = Article.objects.create(title='Old news', content='...')
        self.client.force_login(self.kasir)

        response = self.client.post(reverse('article_delete', args=[article.pk]))

        self.assertRedirects(response, reverse('article_list'))
        self.assertFalse(Article.objects.exists())

    def test_customer_cannot_open_articles(self):
        user = User.objects.create_user(email='user@example.com', full_name='User', password='password123')
        self.client.force_login(user)

        response = self.client.get(reverse('article_list'))

        self.assertRedirects(response, reverse('unauthorized'), target_status_code=403)

    def test_only_published_articles_reach_the_landing_page(self):
        Article.objects.create(title='Published news', content='...', is_published=True)
        Article.objects.create(title='Secret draft', content='...')

        response = self.client.get(reverse('home'))

        self.assertContains(response, 'Published news')
        self.assertNotContains(response, 'Secret draft')
