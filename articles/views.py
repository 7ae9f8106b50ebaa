import logging

from django.contrib import messages
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from accounts.permissions import role_required

from .forms import ArticleForm
from .models import Article

logger = logging.getLogger(__name__)


@role_required('articles')
def article_list(request):
    articles = Article.objects.select_related('author')
    return render(request, 'articles/article_list.html', {'articles': articles})


@role_required('articles')
def article_create(request):
    if request.method == 'POST':
        form = ArticleForm(request.POST)
        if form.is_valid():
            article = form.save(commit=False)
            article.author = request.user
            try:
                article.save()
            except DatabaseError:
                logger.exception('Failed to create article')
                messages.error(request, 'Failed to save article.')
            else:
                messages.success(request, 'Article created.')
                return redirect('article_list')
    else:
        form = ArticleForm()

    return render(request, 'articles/article_form.html', {'form': form, 'article': None})


@role_required('articles')
def article_edit(request, article_id):
    article = get_object_or_404(Article, id=article_id)

    if request.method == 'POST':
        form = ArticleForm(request.POST, instance=article)
        if form.is_valid():
            try:
                form.save()
            except DatabaseError:
                logger.exception('Failed to update article %s', article_id)
                messages.error(request, 'Failed to save article.')
            else:
                messages.success(request, 'Article updated.')
                return redirect('article_list')
    else:
        form = ArticleForm(instance=article)

    return render(request, 'articles/article_form.html', {'form': form, 'article': article})


@require_POST
@role_required('articles')
def article_delete(request, article_id):
    article = get_object_or_404(Article, id=article_id)

    try:
        article.delete()
    except DatabaseError:
        logger.exception('Failed to delete article %s', article_id)
        messages.error(request, 'Failed to delete article.')
    else:
        messages.success(request, 'Article deleted.')

    return redirect('article_list')
